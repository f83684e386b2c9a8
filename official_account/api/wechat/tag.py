# official_account/api/wechat/tag.py

"""
WeChat User Tag Client

Purpose:
Creates, renames and deletes follower tags, and tags/untags followers.

Dependencies:
- typing (standard Python library)
- official_account.api.wechat.client.WeChatClient
"""

from typing import Iterable

from official_account.api.base_client import CastResult
from official_account.api.wechat.client import WeChatClient

ENDPOINT_TAG_CREATE = '/cgi-bin/tags/create'
ENDPOINT_TAG_LIST = '/cgi-bin/tags/get'
ENDPOINT_TAG_UPDATE = '/cgi-bin/tags/update'
ENDPOINT_TAG_DELETE = '/cgi-bin/tags/delete'
ENDPOINT_USER_TAGS = '/cgi-bin/tags/getidlist'
ENDPOINT_USERS_OF_TAG = '/cgi-bin/user/tag/get'
ENDPOINT_TAG_USERS = '/cgi-bin/tags/members/batchtagging'
ENDPOINT_UNTAG_USERS = '/cgi-bin/tags/members/batchuntagging'


class TagClient(WeChatClient):
    """Client for the /cgi-bin/tags endpoints."""

    def create(self, name: str) -> CastResult:
        return self.http_post_json(ENDPOINT_TAG_CREATE, {'tag': {'name': name}})

    def lists(self) -> CastResult:
        return self.http_get(ENDPOINT_TAG_LIST)

    def update(self, tag_id: int, name: str) -> CastResult:
        return self.http_post_json(ENDPOINT_TAG_UPDATE, {'tag': {'id': tag_id, 'name': name}})

    def delete(self, tag_id: int) -> CastResult:
        return self.http_post_json(ENDPOINT_TAG_DELETE, {'tag': {'id': tag_id}})

    def user_tags(self, openid: str) -> CastResult:
        """Returns the tag ids attached to one follower."""
        return self.http_post_json(ENDPOINT_USER_TAGS, {'openid': openid})

    def users_of_tag(self, tag_id: int, next_openid: str = '') -> CastResult:
        """Pages through the followers carrying a tag."""
        return self.http_post_json(ENDPOINT_USERS_OF_TAG, {'tagid': tag_id, 'next_openid': next_openid})

    def tag_users(self, openids: Iterable[str], tag_id: int) -> CastResult:
        return self.http_post_json(ENDPOINT_TAG_USERS, {'openid_list': list(openids), 'tagid': tag_id})

    def untag_users(self, openids: Iterable[str], tag_id: int) -> CastResult:
        return self.http_post_json(ENDPOINT_UNTAG_USERS, {'openid_list': list(openids), 'tagid': tag_id})
