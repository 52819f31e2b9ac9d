import httpx
import pytest
from fastapi import FastAPI, Request

from logparams.app.params.models import ExtractionOptions
from logparams.app.params.service import fields, render


@pytest.fixture
def anyio_backend():
    return "asyncio"


def build_params_app() -> FastAPI:
    """App whose handler extracts parameters, then reads the request itself."""
    params_app = FastAPI()
    params_app.state.options = ExtractionOptions()

    @params_app.api_route("/params", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def inspect_params(request: Request):
        options = request.app.state.options
        rendered = await render(request, options)
        rendered_again = await render(request, options)
        field_set = await fields(request, options)
        payload = {
            "rendered": rendered,
            "rendered_again": rendered_again,
            "fields": field_set.model_dump(mode="json") if field_set else None,
        }
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(
            ("application/x-www-form-urlencoded", "multipart/form-data")
        ):
            form = await request.form()
            payload["form"] = {k: v for k, v in form.items() if isinstance(v, str)}
        payload["body"] = (await request.body()).decode("utf-8", "replace")
        return payload

    return params_app


@pytest.fixture
def app():
    return build_params_app()


@pytest.fixture
async def async_client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver", follow_redirects=True
    ) as client:
        yield client


def make_request(
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    headers: dict[str, str] | None = None,
    body: bytes = b"",
) -> Request:
    """Build a bare Starlette request whose body can be received only once."""
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive():
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    scope = {
        "type": "http",
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 50000),
        "root_path": "",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query_string,
        "headers": [
            (key.lower().encode("latin-1"), value.encode("latin-1"))
            for key, value in (headers or {}).items()
        ],
    }
    return Request(scope, receive)


@pytest.fixture
def request_factory():
    return make_request
