# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for freezing, thawing, and reading property-list field bags."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from types import MappingProxyType

from .errors import RecordFormatError
from .types import PlistValue


def freeze_plist_mapping(value: Mapping[str, PlistValue], *, context: str) -> Mapping[str, PlistValue]:
    """Return an immutable mapping with recursively frozen property-list values.

    Insertion order of ``value`` is preserved so unknown fields round-trip untouched.

    Args:
        value: Mapping to freeze.
        context: Human-friendly prefix describing the validation context.

    Returns:
        Mapping[str, PlistValue]: Mapping with recursively frozen entries.

    Raises:
        RecordFormatError: If any key is not a string.
    """
    frozen: dict[str, PlistValue] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            raise RecordFormatError(f"{context}: expected keys to be strings")
        frozen[key] = freeze_plist_value(item, context=f"{context}.{key}")
    return MappingProxyType(frozen)


def freeze_plist_value(value: PlistValue, *, context: str) -> PlistValue:
    """Return a recursively frozen view of ``value``.

    Args:
        value: Property-list value to normalise.
        context: Human-friendly prefix describing the validation context.

    Returns:
        PlistValue: Frozen value (mappings become mapping proxies, sequences tuples).

    Raises:
        RecordFormatError: If ``value`` is not property-list compatible.
    """
    if isinstance(value, Mapping):
        return freeze_plist_mapping(value, context=context)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, Sequence) and not isinstance(value, str):
        return tuple(freeze_plist_value(item, context=context) for item in value)
    if isinstance(value, (str, int, float, bool, datetime)):
        return value
    raise RecordFormatError(f"{context}: unsupported property list value type {type(value).__name__}")


def thaw_plist_value(value: PlistValue) -> PlistValue:
    """Return a plain, encodable representation of ``value``.

    Args:
        value: Frozen value that may contain mapping proxies or tuples.

    Returns:
        PlistValue: Value composed of built-in ``dict`` and ``list`` containers.
    """

    if isinstance(value, Mapping):
        return {str(key): thaw_plist_value(item) for key, item in value.items()}
    if isinstance(value, (tuple, list)):
        return [thaw_plist_value(item) for item in value]
    return value


def optional_string(value: PlistValue | None, *, key: str, context: str) -> str | None:
    """Return ``value`` as an optional string with validation.

    Args:
        value: Raw value extracted from the record.
        key: Field name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str | None: ``value`` when present, otherwise ``None``.

    Raises:
        RecordFormatError: If ``value`` is present but not a string.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise RecordFormatError(f"{context}: expected '{key}' to be a string if present")
    return value


def string_array(value: PlistValue | None, *, key: str, context: str) -> tuple[str, ...]:
    """Return ``value`` as a tuple of strings with validation.

    Args:
        value: Raw value extracted from the record.
        key: Field name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        tuple[str, ...]: Tuple containing all string entries from ``value``.

    Raises:
        RecordFormatError: If ``value`` is not a sequence of strings.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise RecordFormatError(f"{context}: expected '{key}' to be an array of strings")
    result: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise RecordFormatError(f"{context}: expected '{key}[{index}]' to be a string")
        result.append(item)
    return tuple(result)


__all__ = [
    "freeze_plist_mapping",
    "freeze_plist_value",
    "optional_string",
    "string_array",
    "thaw_plist_value",
]
