import dataclasses
import pytest

from official_account.core.article_model import (
    ARTICLE_FIELDS,
    Article,
    filter_article_fields,
)
from official_account.core.exceptions import InvalidArgumentError

def test_article_fields_canonical_order():
    assert ARTICLE_FIELDS == (
        'title', 'thumb_media_id', 'author', 'digest', 'content', 'content_source_url',
        'show_cover_pic', 'url', 'need_open_comment', 'only_fans_can_comment',
    )

def test_to_dict_only_title():
    assert Article(title='foo').to_dict() == {'title': 'foo'}

def test_to_dict_skips_none_and_empty_but_keeps_zero():
    article = Article(title='foo', author='', digest=None, show_cover_pic=0, need_open_comment=1)
    assert article.to_dict() == {'title': 'foo', 'show_cover_pic': 0, 'need_open_comment': 1}

def test_to_dict_stable_order():
    article = Article.from_mapping({'url': 'http://u', 'author': 'me', 'title': 'foo'})
    assert list(article.to_dict()) == ['title', 'author', 'url']

def test_from_mapping_migrates_show_cover():
    article = Article.from_mapping({'title': 'foo', 'show_cover': 0})

    assert article.show_cover_pic == 0
    assert not hasattr(article, 'show_cover')
    serialized = article.to_dict()
    assert 'show_cover' not in serialized
    assert serialized == {'title': 'foo', 'show_cover_pic': 0}

def test_from_mapping_without_legacy_field():
    assert 'show_cover_pic' not in Article.from_mapping({'title': 'foo'}).to_dict()

def test_from_mapping_explicit_canonical_wins():
    article = Article.from_mapping({'title': 'foo', 'show_cover': 0, 'show_cover_pic': 1})
    assert article.show_cover_pic == 1

def test_from_mapping_does_not_mutate_input():
    data = {'title': 'foo', 'show_cover': 1, 'extra': 'x'}
    Article.from_mapping(data)
    assert data == {'title': 'foo', 'show_cover': 1, 'extra': 'x'}

def test_from_mapping_drops_unknown_keys():
    article = Article.from_mapping({'title': 'foo', 'abc': 'bar'})
    assert article.to_dict() == {'title': 'foo'}

@pytest.mark.parametrize("data", [{}, {'title': ''}, {'author': 'me'}])
def test_from_mapping_requires_title(data):
    with pytest.raises(InvalidArgumentError, match="title"):
        Article.from_mapping(data)

def test_article_is_immutable():
    article = Article(title='foo')
    with pytest.raises(dataclasses.FrozenInstanceError):
        article.title = 'bar'

def test_filter_article_fields():
    assert filter_article_fields({'abc': 'bar'}) == {}
    assert filter_article_fields({'digest': 'd', 'abc': 1, 'title': 't'}) == {'digest': 'd', 'title': 't'}
