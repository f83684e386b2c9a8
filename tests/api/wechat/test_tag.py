import pytest
from unittest.mock import MagicMock

from official_account.api.wechat.tag import TagClient

@pytest.fixture
def tag_client(mock_access_token):
    client = TagClient(access_token=mock_access_token, base_url='https://mock.weixin.qq.com')
    client.http_get = MagicMock(return_value='mock-result')
    client.http_post_json = MagicMock(return_value='mock-result')
    return client

def test_create(tag_client):
    assert tag_client.create('vip') == 'mock-result'
    tag_client.http_post_json.assert_called_once_with('/cgi-bin/tags/create', {'tag': {'name': 'vip'}})

def test_lists(tag_client):
    tag_client.lists()
    tag_client.http_get.assert_called_once_with('/cgi-bin/tags/get')

def test_update(tag_client):
    tag_client.update(12, 'gold')
    tag_client.http_post_json.assert_called_once_with('/cgi-bin/tags/update', {'tag': {'id': 12, 'name': 'gold'}})

def test_delete(tag_client):
    tag_client.delete(12)
    tag_client.http_post_json.assert_called_once_with('/cgi-bin/tags/delete', {'tag': {'id': 12}})

def test_user_tags(tag_client):
    tag_client.user_tags('mock-openid')
    tag_client.http_post_json.assert_called_once_with('/cgi-bin/tags/getidlist', {'openid': 'mock-openid'})

def test_users_of_tag(tag_client):
    tag_client.users_of_tag(12)
    tag_client.http_post_json.assert_called_with('/cgi-bin/user/tag/get', {'tagid': 12, 'next_openid': ''})

    tag_client.users_of_tag(12, 'mock-openid')
    tag_client.http_post_json.assert_called_with('/cgi-bin/user/tag/get', {'tagid': 12, 'next_openid': 'mock-openid'})

def test_tag_and_untag_users(tag_client):
    tag_client.tag_users(['a', 'b'], 12)
    tag_client.http_post_json.assert_called_with(
        '/cgi-bin/tags/members/batchtagging', {'openid_list': ['a', 'b'], 'tagid': 12}
    )

    tag_client.untag_users(iter(['a']), 12)
    tag_client.http_post_json.assert_called_with(
        '/cgi-bin/tags/members/batchuntagging', {'openid_list': ['a'], 'tagid': 12}
    )
