# ==============================
# Testing Fixtures
# ==============================
import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from nora_core.client import OdooClient  # noqa: E402
from nora_tools.dispatcher import ToolDispatcher  # noqa: E402


class FakeOdoo:
    """httpx handler that plays an Odoo /jsonrpc endpoint.

    Results for data calls are registered per (model, method); a value is
    returned as "result", a dict under the "error" key becomes an error
    envelope, and a callable receives (args, kwargs).
    """

    def __init__(self, uid: Any = 7):
        self.uid = uid
        self.requests: list[dict] = []
        self.results: dict[tuple[str, str], Any] = {}
        self.status_code = 200

    @property
    def authenticate_calls(self) -> list[dict]:
        return [r for r in self.requests if r["params"]["service"] == "common"]

    @property
    def execute_calls(self) -> list[dict]:
        return [r for r in self.requests if r["params"]["service"] == "object"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="upstream unavailable")

        params = body["params"]
        if params["service"] == "common":
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": self.uid})

        _db, _uid, _pwd, model, method, args, kwargs = params["args"]
        outcome = self.results.get((model, method))
        if callable(outcome):
            outcome = outcome(args, kwargs)
        if isinstance(outcome, dict) and "error" in outcome:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "error": outcome["error"]})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": outcome})


class RecordingClient:
    """Stand-in for OdooClient that records calls and replays canned outcomes."""

    def __init__(self):
        self.calls: list[tuple[str, str, list, dict]] = []
        self.outcomes: dict[tuple[str, str], Any] = {}

    def on(self, model: str, method: str, outcome: Any) -> "RecordingClient":
        self.outcomes[(model, method)] = outcome
        return self

    def methods(self) -> list[str]:
        return [method for _model, method, _args, _kwargs in self.calls]

    async def call(self, model: str, method: str, args=(), kwargs: Optional[dict] = None) -> Any:
        self.calls.append((model, method, list(args), dict(kwargs or {})))
        outcome = self.outcomes.get((model, method))
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(list(args), dict(kwargs or {}))
        return outcome


@pytest.fixture
def fake_odoo() -> FakeOdoo:
    return FakeOdoo()


@pytest.fixture
def make_client(fake_odoo: FakeOdoo) -> Callable[..., OdooClient]:
    """Factory for OdooClient instances wired to the fake endpoint."""

    def _make(url: str = "https://odoo.example.com/") -> OdooClient:
        return OdooClient(
            url,
            "prod",
            "admin@example.com",
            "s3cret",
            transport=httpx.MockTransport(fake_odoo),
        )

    return _make


@pytest.fixture
def recording_client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def dispatcher(recording_client: RecordingClient) -> ToolDispatcher:
    return ToolDispatcher(recording_client)
