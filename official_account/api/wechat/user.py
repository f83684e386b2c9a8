# official_account/api/wechat/user.py

"""
WeChat User Client

Purpose:
Fetches follower information, sets remarks and manages the account blacklist.
Every method maps its arguments onto a fixed endpoint and payload.

Dependencies:
- typing (standard Python library)
- official_account.api.wechat.client.WeChatClient

Expected Input: Follower openids.
Expected Output: Decoded WeChat responses.
"""

from typing import Iterable, Optional

from official_account.api.base_client import CastResult
from official_account.api.wechat.client import WeChatClient

ENDPOINT_USER_INFO = '/cgi-bin/user/info'
ENDPOINT_USER_BATCHGET = '/cgi-bin/user/info/batchget'
ENDPOINT_USER_LIST = '/cgi-bin/user/get'
ENDPOINT_USER_REMARK = '/cgi-bin/user/info/updateremark'
ENDPOINT_BLACKLIST = '/cgi-bin/tags/members/getblacklist'
ENDPOINT_BATCH_BLOCK = '/cgi-bin/tags/members/batchblacklist'
ENDPOINT_BATCH_UNBLOCK = '/cgi-bin/tags/members/batchunblacklist'

DEFAULT_LANGUAGE = 'zh_CN'


class UserClient(WeChatClient):
    """Client for follower info and blacklist endpoints."""

    def get(self, openid: str, lang: str = DEFAULT_LANGUAGE) -> CastResult:
        """Returns the profile of one follower."""
        return self.http_get(ENDPOINT_USER_INFO, {'openid': openid, 'lang': lang})

    def batch_get(self, openids: Iterable[str], lang: str = DEFAULT_LANGUAGE) -> CastResult:
        """Returns the profiles of several followers (WeChat accepts up to 100)."""
        user_list = [{'openid': openid, 'lang': lang} for openid in openids]
        return self.http_post_json(ENDPOINT_USER_BATCHGET, {'user_list': user_list})

    def lists(self, next_openid: Optional[str] = None) -> CastResult:
        """
        Pages through follower openids, 10000 per call.

        `next_openid` is always sent, empty on the first page.
        """
        return self.http_get(ENDPOINT_USER_LIST, {'next_openid': next_openid})

    def remark(self, openid: str, remark: str) -> CastResult:
        return self.http_post_json(ENDPOINT_USER_REMARK, {'openid': openid, 'remark': remark})

    def blacklist(self, begin_openid: Optional[str] = None) -> CastResult:
        """Pages through blacklisted openids; `begin_openid` is sent as null on the first page."""
        return self.http_post_json(ENDPOINT_BLACKLIST, {'begin_openid': begin_openid})

    def batch_block(self, openids: Iterable[str]) -> CastResult:
        return self.http_post_json(ENDPOINT_BATCH_BLOCK, {'openid_list': list(openids)})

    def batch_unblock(self, openids: Iterable[str]) -> CastResult:
        return self.http_post_json(ENDPOINT_BATCH_UNBLOCK, {'openid_list': list(openids)})
