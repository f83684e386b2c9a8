# official_account/api/base_client.py

"""
Abstract Base Class for API Clients

Purpose:
Defines the HTTP transport shared by every WeChat endpoint client: a
requests session, query-parameter authentication, retry with backoff,
multipart uploads, and content-type driven response casting.

Dependencies:
- abc (standard Python library)
- contextlib (standard Python library)
- requests (external library)
- typing (standard Python library)
- official_account.core.exceptions
- official_account.core.settings
- official_account.utils.logger

Expected Input: Subclasses must implement _authenticate().
Expected Output: Decoded JSON (dict/str) or raw bytes from the remote API.
"""

from abc import ABC, abstractmethod
from contextlib import ExitStack
from pathlib import Path
import requests
import time
from typing import Optional, Dict, Any, Iterable, Union

from official_account.core import settings
from official_account.core.exceptions import ApiError, TransportError
from official_account.utils.logger import log

CastResult = Union[Dict[str, Any], str, bytes]


def is_textual_content_type(content_type: Optional[str], prefixes: Iterable[str]) -> bool:
    """
    Tells whether a Content-Type header denotes a body that should be decoded.

    Args:
        content_type (Optional[str]): Raw header value, e.g. 'application/json; charset=UTF-8'.
        prefixes (Iterable[str]): Lower-case prefixes considered textual.

    Returns:
        bool: True for textual/JSON kinds, False for binary media (and a missing header).
    """
    if not content_type:
        return False
    mime = content_type.split(';', 1)[0].strip().lower()
    return any(mime.startswith(prefix) for prefix in prefixes)


class BaseApiClient(ABC):
    """
    Abstract base class for API clients.

    Attributes:
        base_url (str): The base URL for the API endpoint.
        session (requests.Session): A session object for persistent connections.
        default_timeout (int): Per-request timeout in seconds.
        retries (int): Extra attempts after a retryable failure.
        backoff_factor (float): Delay base, delay = backoff_factor * (2 ** attempt).
        textual_content_types (tuple): Content-Type prefixes decoded by _cast_response.
    """

    def __init__(
        self,
        base_url: str,
        default_timeout: Optional[int] = None,
        retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
        textual_content_types: Optional[Iterable[str]] = None,
    ):
        if not base_url:
            raise ValueError("Base URL cannot be empty.")
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.default_timeout = default_timeout if default_timeout is not None else settings.REQUEST_TIMEOUT
        self.retries = retries if retries is not None else settings.REQUEST_RETRIES
        self.backoff_factor = backoff_factor if backoff_factor is not None else settings.REQUEST_BACKOFF_FACTOR
        self.textual_content_types = tuple(
            textual_content_types if textual_content_types is not None else settings.TEXTUAL_CONTENT_TYPES
        )
        log.debug(f"{self.__class__.__name__} initialized with base URL: {self.base_url}")

    @abstractmethod
    def _authenticate(self) -> Dict[str, Any]:
        """
        Returns the query parameters that authenticate a request
        (for WeChat, the access_token). Called once per request.
        """
        pass

    def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_payload: Optional[Any] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """
        Makes an HTTP request to the specified API endpoint with retry logic.

        Timeouts, connection errors and 5xx responses are retried; 4xx responses
        fail immediately.

        Args:
            method (str): HTTP method ('GET' or 'POST').
            endpoint (str): API endpoint path (relative to base_url).
            params (Optional[Dict[str, Any]]): URL parameters. None values are sent empty.
            json_payload (Optional[Any]): JSON body.
            data (Optional[Dict[str, Any]]): Form fields (used alongside files).
            files (Optional[Dict[str, Any]]): requests-style files mapping of open handles.
            timeout (Optional[int]): Request timeout in seconds. Overrides default.

        Returns:
            requests.Response: The successful response.

        Raises:
            TransportError: If the request fails after all attempts or with a 4xx status.
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        request_timeout = timeout if timeout is not None else self.default_timeout

        query = dict(self._authenticate())
        for key, value in (params or {}).items():
            # requests silently drops None; WeChat expects the key to be present
            query[key] = '' if value is None else value

        last_exception: Optional[Exception] = None

        for attempt in range(self.retries + 1):
            if files and attempt > 0:
                _rewind_files(files)
            try:
                log.debug(f"Request Attempt {attempt + 1}/{self.retries + 1}: {method} {url}")
                log.debug(f"Params: {list(query)}, JSON: {json_payload}, Data: {data}, Files: {files is not None}")

                response = self.session.request(
                    method=method.upper(),
                    url=url,
                    params=query,
                    json=json_payload,
                    data=data,
                    files=files,
                    timeout=request_timeout,
                )
                response.raise_for_status()
                log.debug(f"Request successful: Status {response.status_code}")
                return response

            except requests.exceptions.Timeout as e:
                last_exception = e
                log.warning(f"Request timed out: {e}")
            except requests.exceptions.ConnectionError as e:
                last_exception = e
                log.warning(f"Connection error: {e}")
            except requests.exceptions.HTTPError as e:
                last_exception = e
                status = e.response.status_code if e.response is not None else None
                log.error(f"HTTP error: {status} - {e}")
                if status is not None and 400 <= status < 500:
                    raise TransportError(
                        f"HTTP {status} from {endpoint}",
                        details={'status': status, 'body': e.response.text[:200]},
                    ) from e
            except requests.exceptions.RequestException as e:
                last_exception = e
                log.error(f"An unexpected error occurred during request: {e}")

            if attempt < self.retries:
                delay = self.backoff_factor * (2 ** attempt)
                log.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)

        error_message = f"Request failed after {self.retries + 1} attempts: {last_exception}"
        log.error(error_message)
        raise TransportError(error_message, details={'endpoint': endpoint}) from last_exception

    def _cast_response(self, response: requests.Response) -> CastResult:
        """
        Decodes textual/JSON responses and passes binary bodies through untouched.

        Raises:
            ApiError: If a decoded JSON object carries a non-zero errcode.
        """
        content_type = response.headers.get('Content-Type', '')
        if not is_textual_content_type(content_type, self.textual_content_types):
            log.debug(f"Returning raw body for Content-Type '{content_type}'")
            return response.content

        try:
            payload = response.json()
        except requests.exceptions.JSONDecodeError:
            log.debug("Textual response was not JSON.")
            return response.text

        if isinstance(payload, dict) and payload.get('errcode') not in (0, None):
            errcode = payload.get('errcode')
            errmsg = payload.get('errmsg', '')
            log.error(f"WeChat API error: {errmsg} (Code: {errcode})")
            raise ApiError(errcode, errmsg, details=payload)
        return payload

    def http_get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> CastResult:
        """GET `endpoint` with query `params`."""
        return self._cast_response(self._make_request('GET', endpoint, params=params))

    def http_post_json(
        self,
        endpoint: str,
        payload: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> CastResult:
        """POST `payload` as a JSON body."""
        return self._cast_response(
            self._make_request('POST', endpoint, params=params, json_payload=payload if payload is not None else {})
        )

    def http_upload(
        self,
        endpoint: str,
        files: Dict[str, Union[str, Path]],
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> CastResult:
        """
        Multipart POST. Each entry of `files` maps a form field to a local path;
        the files are opened here and closed once the request completes.
        """
        with ExitStack() as stack:
            handles = {}
            for field_name, path in files.items():
                path = Path(path)
                handles[field_name] = (path.name, stack.enter_context(path.open('rb')))
            log.debug(f"Uploading fields {list(handles)} to {endpoint}")
            response = self._make_request('POST', endpoint, params=params, data=data, files=handles)
        return self._cast_response(response)

    def close_session(self):
        """Closes the underlying requests session."""
        log.debug(f"Closing session for {self.__class__.__name__}")
        self.session.close()


def _rewind_files(files: Dict[str, Any]) -> None:
    for value in files.values():
        handle = value[1] if isinstance(value, tuple) else value
        if hasattr(handle, 'seek'):
            handle.seek(0)
