"""Render parsed parameters as a single display line."""

import json
from typing import Any

from logparams.app.params.models import ExtractionOptions, FieldSet

PREFIX = "Parameters: "


def render_value(value: Any) -> str:
    """Render one value in ``{"key" => value}`` notation.

    Scalars use their JSON text, so strings are quoted and escaped and the
    result never spans more than one line.
    """
    if isinstance(value, dict):
        pairs = (
            f"{json.dumps(str(key), ensure_ascii=False)} => {render_value(item)}"
            for key, item in value.items()
        )
        return "{" + ", ".join(pairs) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    # Form and query strings are escaped too, quotes and newlines included
    return json.dumps(value, ensure_ascii=False)


def render_payload(field_set: FieldSet | None) -> str:
    """Render the populated member of a field set, or "" when there is none."""
    if field_set is None or field_set.payload is None:
        return ""
    return render_value(field_set.payload)


def compose_line(payload: str, options: ExtractionOptions) -> str:
    if not payload and not options.show_empty:
        return ""
    if options.hide_prefix:
        return payload
    return f"{PREFIX}{payload}"
