# =============================================================================
# nora_core/client.py  —  Odoo JSON-RPC Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to an Odoo server over its /jsonrpc endpoint.  Exposes ONE public
#   coroutine, OdooClient.call(model, method, args, kwargs), which:
#     1. Authenticates on first use (common.authenticate) and caches the uid
#     2. Sends object.execute_kw with the cached uid
#     3. Returns the envelope's "result" verbatim, or raises
#
# THE WIRE FORMAT:
#   POST <url>/jsonrpc
#   {"jsonrpc": "2.0", "method": "call",
#    "params": {"service": "common" | "object", "method": ..., "args": [...]},
#    "id": <per-client counter starting at 1>}
#
#   The response carries either "result" or "error": {"message", "data"}.
#
# FAILURE MAPPING:
#   non-2xx status / network failure / non-JSON body  →  TransportError
#   "error" member in the envelope                    →  RemoteError
#   falsy uid from authenticate                       →  AuthError
#
# CONCURRENCY:
#   Runs on a single event loop.  The session uid has no lock: two tool calls
#   arriving together before the first login may both authenticate.  Both
#   store the same credential-derived uid, so the only cost is one extra
#   authenticate request.  The request counter is bumped between awaits and
#   so stays unique.
# =============================================================================

import logging
from typing import Any, Mapping, Optional, Sequence

import httpx

from nora_core.config import Settings
from nora_core.errors import AuthError, RemoteError, TransportError
from nora_core.models import RemoteSession, RpcErr, RpcOk, RpcOutcome

logger = logging.getLogger(__name__)


class OdooClient:
    """Lazily-authenticating client for one Odoo database."""

    def __init__(
        self,
        url: str,
        database: str,
        username: str,
        password: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.database = database
        self.username = username
        self._password = password
        self.session = RemoteSession()
        self._http = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, *, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "OdooClient":
        return cls(
            settings.url,
            settings.database,
            settings.username,
            settings.password,
            timeout=settings.timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    async def call(
        self,
        model: str,
        method: str,
        args: Sequence[Any] = (),
        kwargs: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Run ``model.method(*args, **kwargs)`` on the server.

        Args:
            model: Technical model name (e.g. "res.partner").
            method: ORM method (e.g. "search_read").
            args: Positional arguments, sent as a JSON array.
            kwargs: Named arguments, sent as a JSON object.

        Returns:
            The envelope's result as decoded JSON; shape depends on the method.

        Raises:
            AuthError, TransportError, RemoteError
        """
        uid = await self._ensure_session()
        outcome = await self._rpc(
            "object",
            "execute_kw",
            [self.database, uid, self._password, model, method, list(args), dict(kwargs or {})],
        )
        return self._unwrap(outcome)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    async def _ensure_session(self) -> Any:
        if self.session.is_authenticated:
            return self.session.uid

        logger.info("authenticating user=%s db=%s url=%s", self.username, self.database, self.url)
        outcome = await self._rpc(
            "common", "authenticate", [self.database, self.username, self._password, {}]
        )
        uid = self._unwrap(outcome)
        if not uid:
            # Leave the session empty so the next call tries again.
            raise AuthError(
                f"Authentication failed for user '{self.username}' on database '{self.database}'"
            )
        self.session.uid = uid
        logger.info("authenticated uid=%s", uid)
        return uid

    async def _rpc(self, service: str, method: str, args: list) -> RpcOutcome:
        request_id = self.session.next_request_id()
        payload = {
            "jsonrpc": "2.0",
            "method": "call",
            "params": {"service": service, "method": method, "args": args},
            "id": request_id,
        }
        logger.debug("rpc id=%s service=%s method=%s", request_id, service, method)

        try:
            response = await self._http.post(f"{self.url}/jsonrpc", json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {self.url} failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON in response from {self.url}", status_code=response.status_code
            ) from exc

        return _parse_envelope(body)

    @staticmethod
    def _unwrap(outcome: RpcOutcome) -> Any:
        if isinstance(outcome, RpcErr):
            raise RemoteError(outcome.message, outcome.detail)
        return outcome.value


def _parse_envelope(body: Any) -> RpcOutcome:
    """Turn a decoded JSON-RPC response body into RpcOk / RpcErr."""
    if not isinstance(body, dict):
        return RpcErr("Malformed JSON-RPC response")

    error = body.get("error")
    if error:
        if not isinstance(error, dict):
            return RpcErr(str(error))
        message = error.get("message") or "Odoo error"
        data = error.get("data")
        detail = data.get("message") if isinstance(data, dict) else None
        return RpcErr(str(message), str(detail) if detail else None)

    return RpcOk(body.get("result"))
