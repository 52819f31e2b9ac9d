"""Decide which parameter source applies to a request.

Sources are checked in a fixed order and the first one that yields
parameters wins: submitted form fields, then the URL query string, then a
JSON body. Anything unparsable simply falls through to the next candidate.
"""

import logging

import anyio
from fastapi import Request
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import ClientDisconnect
from starlette.types import Message, Receive

from logparams.app.params.models import FieldSet, ParameterSource
from logparams.app.params.parser import first_values, parse_json_document


log = logging.getLogger("logparams.params.classifier")

FORM_METHODS = frozenset({"POST", "PUT", "PATCH"})
FORM_MEDIA_TYPES = frozenset(
    {"application/x-www-form-urlencoded", "multipart/form-data"}
)
JSON_CONTENT_TYPE = "application/json"
_BODY_LOCK_KEY = "logparams.body_lock"


def _media_type(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    return content_type.partition(";")[0].strip().lower()


def _accepts_json(request: Request) -> bool:
    return JSON_CONTENT_TYPE in request.headers.get("content-type", "").lower()


def _body_lock(request: Request) -> anyio.Lock:
    # Every Request built over the same scope shares the lock
    lock = request.scope.get(_BODY_LOCK_KEY)
    if lock is None:
        lock = anyio.Lock()
        request.scope[_BODY_LOCK_KEY] = lock
    return lock


async def _buffer_body(request: Request) -> bytes | None:
    """Read the whole body and leave it cached on the request for later readers.

    Returns None when the body cannot be read; nothing is cached then, so the
    form parser must not touch the stream either.
    """
    try:
        return await request.body()
    except ClientDisconnect:
        log.warning("params_body_unavailable reason=client_disconnect")
    except RuntimeError as exc:
        # The stream was drained by someone who did not cache it
        log.warning("params_body_unavailable reason=%s", exc)
    return None


async def _form_fields(request: Request) -> dict[str, str]:
    if request.method.upper() not in FORM_METHODS:
        return {}
    if _media_type(request) not in FORM_MEDIA_TYPES:
        return {}
    try:
        form = await request.form()
    except (MultiPartException, HTTPException, ValueError) as exc:
        log.debug("params_form_unparsable reason=%s", exc)
        return {}
    return first_values(form.multi_items())


async def read_body(request: Request) -> bytes:
    """Return the request body, buffering it on first use."""
    async with _body_lock(request):
        body = await _buffer_body(request)
    return body if body is not None else b""


async def classify(request: Request) -> FieldSet:
    """Pick the parameter source of a request and return its unredacted fields."""
    async with _body_lock(request):
        body = await _buffer_body(request)
        form = await _form_fields(request) if body is not None else {}

    if form:
        return FieldSet(source=ParameterSource.FORM, form=form)

    query = first_values(request.query_params.multi_items())
    if query:
        return FieldSet(source=ParameterSource.QUERY, query=query)

    if _accepts_json(request):
        source, document = parse_json_document(body or b"")
        if source is ParameterSource.JSON_OBJECT:
            return FieldSet(source=source, json_object=document)
        if source is ParameterSource.JSON_ARRAY:
            return FieldSet(source=source, json_array=document)

    log.debug("params_source_none method=%s", request.method)
    return FieldSet()


def replay_body(body: bytes, receive: Receive) -> Receive:
    """Return a receive channel that yields ``body`` once, then defers to ``receive``."""
    delivered = False

    async def replay() -> Message:
        nonlocal delivered
        if not delivered:
            delivered = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay
