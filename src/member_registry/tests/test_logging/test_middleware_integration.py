import json
import logging
import uuid

from fastapi import FastAPI
from starlette.testclient import TestClient

from member_registry.config.settings import Settings
from member_registry.core.logging.builder import setup_logging
from member_registry.core.logging.middleware import RequestIDMiddleware, _resolve_request_id


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    async def hello():
        logging.getLogger("member_registry.test").info("handling hello")
        return {"ok": True}

    return app


def test_request_id_in_response_and_logs(capsys, restore_logging):
    setup_logging(Settings(ENV="production", LOG_FORMAT="json", LOG_LEVEL="INFO", LOG_TO_STDOUT=True))

    client = TestClient(make_app())
    resp = client.get("/hello")
    assert resp.status_code == 200

    rid = resp.headers.get("X-Request-ID")
    assert rid is not None

    stderr = capsys.readouterr().err.strip()
    assert stderr, "Expected logs on stderr but nothing was captured."

    found = False
    for line in stderr.splitlines():
        try:
            rec = json.loads(line)
        except ValueError:
            continue
        if rec.get("request_id") == rid and rec.get("message") == "handling hello":
            found = True
            break

    assert found, "No log line in stderr with matching request_id"


def test_incoming_uuid_request_id_is_reused():
    incoming = str(uuid.uuid4())
    client = TestClient(make_app())

    resp = client.get("/hello", headers={"X-Request-ID": incoming})

    assert resp.headers["X-Request-ID"] == incoming


def test_non_uuid_request_id_is_replaced():
    rid = _resolve_request_id("bad\nid")
    assert rid != "bad\nid"
    uuid.UUID(rid)
