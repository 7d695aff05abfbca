# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for converting records and digest maps to property lists."""

from __future__ import annotations

import plistlib
from collections.abc import Mapping, Sequence
from typing import cast
from xml.parsers.expat import ExpatError

from .errors import RecordFormatError
from .models import Record
from .types import PlistValue

# plistlib surfaces malformed documents through several unrelated exception types
_DECODE_ERRORS: tuple[type[Exception], ...] = (plistlib.InvalidFileException, ExpatError, ValueError, TypeError)


def decode_plist(data: bytes, *, context: str) -> Mapping[str, PlistValue]:
    """Decode a property-list document whose root must be a dictionary.

    Args:
        data: Raw document bytes (XML or binary property list).
        context: Repository reference used in error messages.

    Returns:
        Mapping[str, PlistValue]: Decoded top-level dictionary.

    Raises:
        RecordFormatError: If the document is malformed or its root is not a dictionary.
    """

    try:
        payload = plistlib.loads(data)
    except _DECODE_ERRORS as exc:
        raise RecordFormatError(f"{context}: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise RecordFormatError(f"{context}: expected a dictionary at the document root")
    return cast(Mapping[str, PlistValue], payload)


def encode_catalog(records: Sequence[Record]) -> bytes:
    """Serialize the ordered ``records`` of a catalog as an XML property list."""

    return plistlib.dumps([record.to_plist() for record in records])


def encode_icon_hashes(digests: Mapping[str, str]) -> bytes:
    """Serialize an icon digest map with keys sorted for stable output."""

    return plistlib.dumps(dict(digests), sort_keys=True)


__all__ = [
    "decode_plist",
    "encode_catalog",
    "encode_icon_hashes",
]
