# official_account/core/exceptions.py

"""
Exception Hierarchy

Purpose:
Errors raised by the SDK. Local argument problems are detected before any
network call (InvalidArgumentError); everything coming back from the wire is a
TransportError, with ApiError for WeChat's own error codes.
"""

import json
from typing import Any, Dict, Mapping, Optional


class OfficialAccountError(Exception):
    """Root of all SDK errors."""


class InvalidArgumentError(OfficialAccountError, ValueError):
    """Raised when a caller-supplied argument cannot be used (e.g. missing file)."""


class TransportError(OfficialAccountError, ConnectionError):
    """Raised when the HTTP exchange with WeChat fails."""

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.details: Dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        try:
            detail_repr = json.dumps(self.details, ensure_ascii=False)
        except TypeError:
            detail_repr = str(self.details)
        return f"{base} | details: {detail_repr}"


class ApiError(TransportError):
    """WeChat answered, but with a non-zero errcode."""

    def __init__(self, errcode: int, errmsg: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(f"WeChat API error {errcode}: {errmsg}", details)
        self.errcode = errcode
        self.errmsg = errmsg
