# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading utilities for validating package-description records."""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources
from typing import Any, Final

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from ..errors import RecordFormatError

SCHEMA_PACKAGE: Final[str] = "makecatalogs.schemas"
RECORD_SCHEMA_NAME: Final[str] = "pkginfo.schema.json"


@lru_cache(maxsize=1)
def record_validator() -> Draft202012Validator:
    """Return the validator for decoded package-description documents.

    Raises:
        RecordFormatError: If the bundled schema cannot be parsed.
    """

    schema_text = resources.files(SCHEMA_PACKAGE).joinpath(RECORD_SCHEMA_NAME).read_text(encoding="utf-8")
    try:
        schema = json.loads(schema_text)
    except json.JSONDecodeError as exc:  # pragma: no cover - bundled schema is static
        raise RecordFormatError(f"{RECORD_SCHEMA_NAME}: failed to parse JSON schema") from exc
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def record_schema_error(document: Mapping[str, Any]) -> str | None:
    """Return the most relevant schema violation for ``document``, if any.

    Args:
        document: Decoded top-level dictionary of a package description.

    Returns:
        str | None: Human-readable violation, or ``None`` when the document is valid.
    """

    error = best_match(record_validator().iter_errors(dict(document)))
    if error is None:
        return None
    location = ".".join(str(part) for part in error.absolute_path)
    return f"{location}: {error.message}" if location else error.message


__all__ = ["record_schema_error", "record_validator"]
