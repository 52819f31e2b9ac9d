"""ASGI middleware that logs the parameters of every HTTP request."""

import logging
from uuid import uuid4

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from logparams.app.params.classifier import read_body, replay_body
from logparams.app.params.models import ExtractionOptions
from logparams.app.params.service import LineSink, ParameterExtractor
from logparams.utils.log_context import bound_request_id


log = logging.getLogger("logparams.params.middleware")

REQUEST_ID_HEADER = "x-request-id"


class ParameterLoggingMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        options: ExtractionOptions | None = None,
        sink: LineSink | None = None,
        level: int = logging.INFO,
    ) -> None:
        self.app = app
        self.extractor = ParameterExtractor(options)
        self.sink = sink
        self.level = level

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        with bound_request_id(request_id):
            log.debug("request_params method=%s path=%s", request.method, request.url.path)
            await self.extractor.emit(request, sink=self.sink, level=self.level)
            body = await read_body(request)
            # Handlers parse their own form from the replayed body
            await request.close()
            await self.app(scope, replay_body(body, receive), send)
