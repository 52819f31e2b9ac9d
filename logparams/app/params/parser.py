"""Turn raw form, query and JSON input into plain field mappings."""

import json
import logging
from collections.abc import Iterable
from typing import Any

from logparams.app.params.models import ParameterSource


log = logging.getLogger("logparams.params.parser")


def first_values(items: Iterable[tuple[str, Any]]) -> dict[str, str]:
    """Collapse multi-valued pairs, keeping the first string value per key.

    Non-string values (multipart file uploads) are not parameters and are
    skipped.
    """
    fields: dict[str, str] = {}
    for key, value in items:
        if not isinstance(value, str):
            continue
        fields.setdefault(key, value)
    return fields


def parse_json_document(
    body: bytes,
) -> tuple[ParameterSource, dict[str, Any] | list[dict[str, Any]] | None]:
    """Decode a JSON body as an object, falling back to an array of objects."""
    try:
        document = json.loads(body)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        log.debug("params_json_unparsable reason=%s", exc)
        return ParameterSource.NONE, None

    if isinstance(document, dict):
        if document:
            return ParameterSource.JSON_OBJECT, document
        return ParameterSource.NONE, None

    if isinstance(document, list):
        if document and all(isinstance(item, dict) for item in document):
            return ParameterSource.JSON_ARRAY, document
        log.debug("params_json_unsupported reason=expected_array_of_objects")
        return ParameterSource.NONE, None

    log.debug("params_json_unsupported reason=expected_object type=%s", type(document).__name__)
    return ParameterSource.NONE, None
