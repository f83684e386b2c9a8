# official_account/core/article_model.py

"""
Article Data Model Module

Purpose:
Defines the news article record sent to the WeChat material endpoints
(add_news / update_news). Articles are built once from a mapping and then
only read or serialized.

Dependencies:
- dataclasses (standard Python library)
- typing (standard Python library)
- official_account.core.exceptions
- official_account.utils.logger

Expected Input: A mapping of article fields (possibly using legacy key names).
Expected Output: Immutable Article instances and their wire dictionaries.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from official_account.core.exceptions import InvalidArgumentError
from official_account.utils.logger import log

# Old key name -> canonical key name
LEGACY_FIELD_ALIASES = {
    'show_cover': 'show_cover_pic',
}

@dataclass(frozen=True)
class Article:
    """
    A single news item of a multi-article "news" material.

    Only `title` is required; every other field is omitted from the
    serialized form while it is None or an empty string.
    """
    title: str
    thumb_media_id: Optional[str] = None
    author: Optional[str] = None
    digest: Optional[str] = None
    content: Optional[str] = None
    content_source_url: Optional[str] = None
    show_cover_pic: Optional[int] = None
    url: Optional[str] = None
    need_open_comment: Optional[int] = None
    only_fans_can_comment: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'Article':
        """
        Builds an Article from a mapping, migrating legacy keys first.

        Args:
            data (Mapping[str, Any]): Raw article fields.

        Returns:
            Article: The constructed article.

        Raises:
            InvalidArgumentError: If `title` is missing or empty.
        """
        migrated = _migrate_legacy_fields(data)
        known = {key: value for key, value in migrated.items() if key in ARTICLE_FIELDS}
        dropped = set(migrated) - set(known)
        if dropped:
            log.debug(f"Ignoring unknown article fields: {sorted(dropped)}")
        if not known.get('title'):
            raise InvalidArgumentError("Article requires a non-empty 'title'.")
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the set fields in canonical order."""
        result: Dict[str, Any] = {}
        for name in ARTICLE_FIELDS:
            value = getattr(self, name)
            if value is None or value == '':
                continue
            result[name] = value
        return result


ARTICLE_FIELDS = tuple(f.name for f in fields(Article))


def _migrate_legacy_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `data` with legacy aliases renamed; an explicit canonical key wins."""
    migrated = dict(data)
    for legacy, canonical in LEGACY_FIELD_ALIASES.items():
        if legacy in migrated:
            value = migrated.pop(legacy)
            migrated.setdefault(canonical, value)
    return migrated


def filter_article_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Keeps only the keys defined on Article, preserving the input order."""
    return {key: value for key, value in data.items() if key in ARTICLE_FIELDS}
