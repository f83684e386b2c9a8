# official_account/api/wechat/client.py

"""
WeChat Official Account API Client

Purpose:
Base class for the endpoint clients (material, user, tag). Wires the shared
transport to an AccessToken provider so each request carries the
access_token query field.

Dependencies:
- typing (standard Python library)
- official_account.api.base_client.BaseApiClient
- official_account.api.wechat.access_token.AccessToken
- official_account.core.settings
- official_account.utils.logger

Expected Input: An AccessToken, or WeChat App ID and Secret configured in settings.
Expected Output: Subclasses return data from the WeChat API or raise exceptions on failure.
"""

from typing import Optional, Dict, Any

from official_account.api.base_client import BaseApiClient
from official_account.api.wechat.access_token import AccessToken
from official_account.core import settings
from official_account.utils.logger import log

class WeChatClient(BaseApiClient):
    """
    Client for interacting with the WeChat Official Account API.
    Subclasses only describe endpoints and payloads.
    """

    def __init__(self, access_token: Optional[AccessToken] = None, base_url: Optional[str] = None, **transport_options):
        """
        Initializes the WeChatClient.

        Args:
            access_token (Optional[AccessToken]): Credential provider. Built from
                settings.WECHAT_APP_ID / WECHAT_APP_SECRET when omitted.
            base_url (Optional[str]): API root, defaults to settings.WECHAT_API_BASE_URL.
            **transport_options: Forwarded to BaseApiClient (timeout, retries, ...).
        """
        base_url = base_url or settings.WECHAT_API_BASE_URL
        if access_token is None:
            access_token = AccessToken(
                app_id=settings.WECHAT_APP_ID,
                app_secret=settings.WECHAT_APP_SECRET,
                base_url=base_url,
                **transport_options,
            )
        super().__init__(base_url=base_url, **transport_options)
        self.access_token = access_token
        log.debug(f"{self.__class__.__name__} ready.")

    def _authenticate(self) -> Dict[str, Any]:
        return self.access_token.get_query_fields()

    def close_session(self):
        """Closes this client's session and the token provider's."""
        super().close_session()
        self.access_token.close_session()
