"""Public entry points for extracting request parameters for logs."""

import logging
from collections.abc import Callable
from typing import Union

from fastapi import Request

from logparams.app.params.classifier import classify
from logparams.app.params.models import ExtractionOptions, FieldSet, ParameterSource
from logparams.app.params.renderer import compose_line, render_payload
from logparams.utils.log_safety import redact_param_list, redact_params


log = logging.getLogger("logparams.params.service")

LineSink = Union[logging.Logger, logging.LoggerAdapter, Callable[[str], object]]


def _redact(field_set: FieldSet) -> FieldSet:
    if field_set.source is ParameterSource.FORM:
        return field_set.model_copy(update={"form": redact_params(field_set.form)})
    if field_set.source is ParameterSource.QUERY:
        return field_set.model_copy(update={"query": redact_params(field_set.query)})
    if field_set.source is ParameterSource.JSON_OBJECT:
        return field_set.model_copy(
            update={"json_object": redact_params(field_set.json_object)}
        )
    if field_set.source is ParameterSource.JSON_ARRAY:
        return field_set.model_copy(
            update={"json_array": redact_param_list(field_set.json_array)}
        )
    return field_set


def _write_line(sink: LineSink, line: str, level: int) -> None:
    if isinstance(sink, (logging.Logger, logging.LoggerAdapter)):
        sink.log(level, "%s", line)
    else:
        sink(line)


class ParameterExtractor:
    """Classify, parse, redact and render the parameters of a request."""

    def __init__(self, options: ExtractionOptions | None = None):
        self.options = options or ExtractionOptions()

    async def _extract(self, request: Request) -> FieldSet:
        field_set = await classify(request)
        if self.options.show_password:
            return field_set
        return _redact(field_set)

    async def fields(self, request: Request) -> FieldSet | None:
        field_set = await self._extract(request)
        if field_set.source is ParameterSource.NONE and not self.options.show_empty:
            return None
        return field_set

    async def render(self, request: Request) -> str:
        field_set = await self._extract(request)
        return compose_line(render_payload(field_set), self.options)

    async def emit(
        self,
        request: Request,
        sink: LineSink | None = None,
        level: int = logging.INFO,
    ) -> None:
        """Write the rendered parameters as one line; skip empty results."""
        line = await self.render(request)
        if not line and not self.options.show_empty:
            return
        _write_line(sink if sink is not None else log, line, level)


async def render(request: Request, options: ExtractionOptions | None = None) -> str:
    return await ParameterExtractor(options).render(request)


async def emit(
    request: Request,
    options: ExtractionOptions | None = None,
    sink: LineSink | None = None,
    level: int = logging.INFO,
) -> None:
    await ParameterExtractor(options).emit(request, sink=sink, level=level)


async def fields(
    request: Request, options: ExtractionOptions | None = None
) -> FieldSet | None:
    return await ParameterExtractor(options).fields(request)
