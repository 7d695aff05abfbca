# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for property-list helpers."""

from __future__ import annotations

import plistlib

import pytest

from makecatalogs.errors import RecordFormatError
from makecatalogs.models import Record
from makecatalogs.serialization import decode_plist, encode_catalog, encode_icon_hashes


def test_decode_plist_accepts_binary_documents() -> None:
    data = plistlib.dumps({"name": "Foo", "blob": b"\x00\x01"}, fmt=plistlib.FMT_BINARY)

    assert decode_plist(data, context="pkgsinfo/foo") == {"name": "Foo", "blob": b"\x00\x01"}


@pytest.mark.parametrize(
    "payload",
    [b"", b"not a plist", b"<?xml version='1.0'?><plist><dict><key>a</key>", plistlib.dumps([1, 2])],
)
def test_decode_plist_rejects_malformed_documents(payload: bytes) -> None:
    with pytest.raises(RecordFormatError, match="pkgsinfo/foo"):
        decode_plist(payload, context="pkgsinfo/foo")


def test_encoded_catalog_preserves_record_order_and_nested_values() -> None:
    records = [
        Record.from_mapping("pkgsinfo/b", {"name": "B", "receipts": [{"packageid": "com.example.b"}]}),
        Record.from_mapping("pkgsinfo/a", {"name": "A", "catalogs": ["testing"]}),
    ]

    decoded = plistlib.loads(encode_catalog(records))

    assert [entry["name"] for entry in decoded] == ["B", "A"]
    assert decoded[0]["receipts"] == [{"packageid": "com.example.b"}]


def test_icon_hashes_are_encoded_with_sorted_keys() -> None:
    payload = encode_icon_hashes({"b.png": "2" * 64, "a.png": "1" * 64})

    assert list(plistlib.loads(payload)) == ["a.png", "b.png"]
