# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types for the Marketing Cloud Data Extensions client.

Every failure surfaced by the client is a :class:`DataExtensionError` carrying
an explicit ``code`` (the failing stage) and ``subcode`` (the specific kind),
plus the HTTP status and parsed details where a response was involved.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import (
    LOOKUP_DATA_EXTENSION_NOT_FOUND,
    http_subcode,
    is_transient_status,
)


class DataExtensionError(Exception):
    """Base structured error for the Data Extensions client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details if details is not None else {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ShapeError(DataExtensionError, ValueError):
    """Row payload failed structural validation. Raised before any network call."""

    def __init__(self, message: str, *, subcode: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")

    @property
    def kind(self) -> str:
        return self.subcode


class QueryError(DataExtensionError, ValueError):
    """A filter specification could not be turned into a query string. Raised before any network call."""

    def __init__(self, message: str, *, subcode: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class DataExtensionNotFoundError(DataExtensionError, LookupError):
    """A Data Extension name was used before being registered on the client."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f'Data Extension "{name}" not found. Use add_data_extension() to register it first.',
            code="lookup_error",
            subcode=LOOKUP_DATA_EXTENSION_NOT_FOUND,
            details={"name": name},
            source="client",
        )
        self.name = name


class AuthError(DataExtensionError):
    """The authentication endpoint rejected the credentials or could not be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        if subcode is None and status_code is not None:
            subcode = http_subcode(status_code)
        super().__init__(
            message,
            code="auth_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server" if status_code is not None else "client",
            is_transient=is_transient_status(status_code),
        )


class RequestError(DataExtensionError):
    """A Data Extension request failed; carries the HTTP status and parsed error body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        subcode: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        if subcode is None and status_code is not None:
            subcode = http_subcode(status_code)
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server" if status_code is not None else "client",
            is_transient=is_transient_status(status_code),
        )


__all__ = [
    "DataExtensionError",
    "ShapeError",
    "QueryError",
    "DataExtensionNotFoundError",
    "AuthError",
    "RequestError",
]
