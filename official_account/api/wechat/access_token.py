# official_account/api/wechat/access_token.py

"""
WeChat Access Token Provider

Purpose:
Fetches and caches the Official Account access_token and exposes it as the
query fields every other WeChat endpoint client appends to its requests.

Dependencies:
- time (standard Python library)
- typing (standard Python library)
- official_account.api.base_client.BaseApiClient
- official_account.core.exceptions
- official_account.utils.logger

Expected Input: AppID and AppSecret of the Official Account.
Expected Output: {'access_token': <token>} mappings.
"""

import time
from typing import Optional, Dict, Any

from official_account.api.base_client import BaseApiClient
from official_account.core.exceptions import TransportError
from official_account.utils.logger import log

ENDPOINT_ACCESS_TOKEN = '/cgi-bin/token'

# Refresh this many seconds before WeChat's stated expiry
EXPIRY_MARGIN_SECONDS = 300

class AccessToken(BaseApiClient):
    """Credential provider backed by the client_credential grant."""

    def __init__(self, app_id: str, app_secret: str, base_url: str, **transport_options):
        if not app_id or not app_secret:
            raise ValueError("WECHAT_APP_ID and WECHAT_APP_SECRET must be configured.")
        super().__init__(base_url=base_url, **transport_options)
        self.app_id = app_id
        self.app_secret = app_secret
        self._access_token: Optional[str] = None
        self._token_expiry_time: float = 0.0

    def _authenticate(self) -> Dict[str, Any]:
        # The token endpoint authenticates with appid/secret in its own params
        return {}

    def get_token(self, force_refresh: bool = False) -> str:
        """
        Returns a valid access token, fetching a new one when the cached
        token is missing, expired, or `force_refresh` is set.

        Raises:
            TransportError: If the token cannot be retrieved.
        """
        if force_refresh or not self._access_token or time.time() >= self._token_expiry_time:
            log.info("Access token is invalid or expired. Fetching new token...")
            self._fetch_access_token()
        return self._access_token

    def get_query_fields(self) -> Dict[str, str]:
        """Query parameters that authenticate a WeChat API call."""
        return {'access_token': self.get_token()}

    def _fetch_access_token(self) -> None:
        params = {
            'grant_type': 'client_credential',
            'appid': self.app_id,
            'secret': self.app_secret,
        }
        try:
            response_data = self.http_get(ENDPOINT_ACCESS_TOKEN, params=params)
        except TransportError as e:
            self._access_token = None
            self._token_expiry_time = 0.0
            log.error(f"Failed to fetch access token. Error: {e}")
            raise TransportError("Failed to retrieve WeChat access token.", details=e.details) from e

        if not isinstance(response_data, dict) or 'access_token' not in response_data or 'expires_in' not in response_data:
            self._access_token = None
            self._token_expiry_time = 0.0
            log.error(f"Error fetching access token: WeChat API response missing token or expiry. Response: {response_data}")
            raise TransportError("WeChat token response missing access_token or expires_in.")

        self._access_token = response_data['access_token']
        expires_in = int(response_data['expires_in']) - EXPIRY_MARGIN_SECONDS
        self._token_expiry_time = time.time() + max(expires_in, 0)
        log.info(f"Successfully fetched new access token. Expires in approx {expires_in / 60:.1f} minutes.")
