# official_account/api/wechat/material.py

"""
WeChat Permanent Material Client

Purpose:
Uploads, fetches, updates, lists and deletes permanent materials (images,
thumbs, voices, videos and news articles) of an Official Account.

Dependencies:
- json (standard Python library)
- pathlib (standard Python library)
- typing (standard Python library)
- official_account.api.wechat.client.WeChatClient
- official_account.core.article_model
- official_account.core.exceptions
- official_account.utils.logger

Expected Input: Local file paths, Article objects or article mappings, media ids.
Expected Output: Decoded WeChat responses; `get` returns raw bytes for binary media.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from official_account.api.base_client import CastResult
from official_account.api.wechat.client import WeChatClient
from official_account.core.article_model import Article, filter_article_fields
from official_account.core.exceptions import InvalidArgumentError
from official_account.utils.logger import log

ENDPOINT_UPLOAD = '/cgi-bin/material/add_material'
ENDPOINT_NEWS_UPLOAD = '/cgi-bin/material/add_news'
ENDPOINT_NEWS_UPDATE = '/cgi-bin/material/update_news'
ENDPOINT_NEWS_IMAGE_UPLOAD = '/cgi-bin/media/uploadimg'
ENDPOINT_GET = '/cgi-bin/material/get_material'
ENDPOINT_DELETE = '/cgi-bin/material/del_material'
ENDPOINT_LISTS = '/cgi-bin/material/batchget_material'
ENDPOINT_STATS = '/cgi-bin/material/get_materialcount'

LISTS_MIN_COUNT = 1
LISTS_MAX_COUNT = 20

ArticleLike = Union[Article, Mapping[str, Any]]
ArticleInput = Union[ArticleLike, Sequence[ArticleLike]]


class MaterialClient(WeChatClient):
    """Client for the /cgi-bin/material endpoints."""

    def upload_image(self, path: Union[str, Path]) -> CastResult:
        """Uploads a permanent image material."""
        return self._upload_media('image', path)

    def upload_thumb(self, path: Union[str, Path]) -> CastResult:
        """Uploads a permanent thumbnail, usable as an article's thumb_media_id."""
        return self._upload_media('thumb', path)

    def upload_voice(self, path: Union[str, Path]) -> CastResult:
        """Uploads a permanent voice material."""
        return self._upload_media('voice', path)

    def upload_video(self, path: Union[str, Path], title: str, introduction: str) -> CastResult:
        """
        Uploads a permanent video material.

        WeChat requires the video's title and introduction as a JSON document
        inside the multipart form field `description`.

        Args:
            path (Union[str, Path]): Local video file.
            title (str): Video title.
            introduction (str): Video description text.

        Raises:
            InvalidArgumentError: If `path` is not an existing file.
        """
        description = json.dumps({'title': title, 'introduction': introduction}, ensure_ascii=False)
        return self._upload_media('video', path, form={'description': description})

    def upload_article(self, articles: ArticleInput) -> CastResult:
        """
        Creates a news material from one article or a sequence of articles.

        Args:
            articles (ArticleInput): An Article, an article mapping, or a
                sequence of either. Order is preserved.
        """
        normalized = [_article_to_dict(item) for item in _as_article_list(articles)]
        log.info(f"Uploading news material with {len(normalized)} article(s).")
        return self.http_post_json(ENDPOINT_NEWS_UPLOAD, {'articles': normalized})

    def update_article(self, media_id: str, article: ArticleInput, index: int = 0) -> CastResult:
        """
        Replaces the article at `index` of an existing news material.

        When `article` is a sequence, only its element at `index` is sent.
        Mappings are reduced to the known Article fields; unknown keys are dropped.

        Raises:
            InvalidArgumentError: If `index` is outside a supplied sequence.
        """
        target = article
        if not _is_single_article(article):
            candidates = list(article)
            if not 0 <= index < len(candidates):
                raise InvalidArgumentError(
                    f"Article index {index} out of range for {len(candidates)} supplied article(s)."
                )
            target = candidates[index]

        if isinstance(target, Article):
            payload_article = target.to_dict()
        else:
            payload_article = filter_article_fields(target)

        payload = {
            'media_id': media_id,
            'index': index,
            'articles': payload_article,
        }
        log.info(f"Updating news material {media_id} at index {index}.")
        return self.http_post_json(ENDPOINT_NEWS_UPDATE, payload)

    def upload_article_image(self, path: Union[str, Path]) -> CastResult:
        """Uploads an image for use inside article content; WeChat answers with its URL."""
        file_path = _ensure_file(path)
        log.info(f"Uploading article image from {file_path}")
        return self.http_upload(ENDPOINT_NEWS_IMAGE_UPLOAD, files={'media': file_path})

    def get(self, media_id: str) -> CastResult:
        """
        Fetches a permanent material.

        News and video materials come back as JSON and are decoded; image,
        voice and other binary materials are returned as raw bytes.
        """
        return self.http_post_json(ENDPOINT_GET, {'media_id': media_id})

    def delete(self, media_id: str) -> CastResult:
        return self.http_post_json(ENDPOINT_DELETE, {'media_id': media_id})

    def lists(self, type: str, offset: int = 0, count: int = 20) -> CastResult:
        """
        Lists permanent materials of one type.

        `count` is silently clamped into [1, 20], the range WeChat accepts.
        """
        clamped = max(LISTS_MIN_COUNT, min(count, LISTS_MAX_COUNT))
        if clamped != count:
            log.debug(f"Material list count {count} clamped to {clamped}.")
        params = {
            'type': type,
            'offset': offset,
            'count': clamped,
        }
        return self.http_post_json(ENDPOINT_LISTS, params)

    def stats(self) -> CastResult:
        """Returns the per-type material counts."""
        return self.http_get(ENDPOINT_STATS)

    def _upload_media(self, media_type: str, path: Union[str, Path], form: Optional[Dict[str, Any]] = None) -> CastResult:
        file_path = _ensure_file(path)
        log.info(f"Uploading permanent {media_type} from {file_path}")
        return self.http_upload(
            ENDPOINT_UPLOAD,
            files={'media': file_path},
            data=form,
            params={'type': media_type},
        )


def _ensure_file(path: Union[str, Path]) -> Path:
    file_path = Path(path)
    if not file_path.is_file():
        log.error(f"Media file not found: {file_path}")
        raise InvalidArgumentError(f"File does not exist, or is not a regular file: {file_path}")
    return file_path


def _is_single_article(value: Any) -> bool:
    return isinstance(value, (Article, Mapping))


def _as_article_list(articles: ArticleInput) -> List[ArticleLike]:
    """A single article becomes a one-element list; sequences are copied in order."""
    if _is_single_article(articles):
        return [articles]
    return list(articles)


def _article_to_dict(article: ArticleLike) -> Dict[str, Any]:
    if isinstance(article, Article):
        return article.to_dict()
    return dict(article)
