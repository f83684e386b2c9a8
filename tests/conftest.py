# tests/conftest.py

import json
import pytest
import requests
from unittest.mock import MagicMock

from official_account.api.wechat.access_token import AccessToken


@pytest.fixture
def make_response():
    """Factory fixture creating mock requests.Response objects."""
    def _make(body=None, content_type='application/json; charset=UTF-8', status_code=200, raw=None):
        mock_resp = MagicMock(spec=requests.Response)
        mock_resp.status_code = status_code
        mock_resp.headers = {'Content-Type': content_type} if content_type is not None else {}
        if raw is not None:
            mock_resp.content = raw
            mock_resp.text = raw.decode('utf-8', errors='replace')
            mock_resp.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "doc", 0)
        else:
            text = json.dumps(body if body is not None else {})
            mock_resp.content = text.encode('utf-8')
            mock_resp.text = text
            mock_resp.json.return_value = body if body is not None else {}
        return mock_resp
    return _make


@pytest.fixture
def mock_access_token():
    """An AccessToken stand-in that never touches the network."""
    token = MagicMock(spec=AccessToken)
    token.get_query_fields.return_value = {'access_token': 'mock-token'}
    return token
