"""Pydantic models for request parameter extraction."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExtractionOptions(BaseModel):
    """Per-call switches controlling what gets rendered."""

    model_config = ConfigDict(frozen=True)

    show_empty: bool = False
    show_password: bool = False
    hide_prefix: bool = False


class ParameterSource(str, Enum):
    """Where the parameters of a request were found."""

    FORM = "form"
    QUERY = "query"
    JSON_OBJECT = "json_object"
    JSON_ARRAY = "json_array"
    NONE = "none"


class FieldSet(BaseModel):
    """Parsed parameters of one request.

    Only the member matching ``source`` is populated.
    """

    source: ParameterSource = ParameterSource.NONE
    form: dict[str, str] = Field(default_factory=dict)
    query: dict[str, str] = Field(default_factory=dict)
    json_object: dict[str, Any] = Field(default_factory=dict)
    json_array: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def payload(self) -> dict[str, Any] | list[dict[str, Any]] | None:
        """Return the populated member, or None when no source matched."""
        if self.source is ParameterSource.FORM:
            return self.form
        if self.source is ParameterSource.QUERY:
            return self.query
        if self.source is ParameterSource.JSON_OBJECT:
            return self.json_object
        if self.source is ParameterSource.JSON_ARRAY:
            return self.json_array
        return None
