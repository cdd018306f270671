from __future__ import annotations

from typing import Any

import httpx
import structlog

from utility_billing.core.constants import ADMIN_PIN_HEADER, DEFAULT_BASE_URL
from utility_billing.core.exceptions import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    GatewayError,
)
from utility_billing.gateway.base import Gateway

logger = structlog.get_logger(__name__)

# Method → (HTTP verb, URL path, needs admin PIN) routing table.
_METHOD_ROUTES: dict[str, tuple[str, str, bool]] = {
    "config.get": ("GET", "/api/config", False),
    "config.update": ("PUT", "/api/admin/config", True),
    "config.history": ("GET", "/api/admin/config/history", True),
    "bill.calculate": ("POST", "/api/calculate", False),
}


class HttpGateway(Gateway):
    """HTTP/JSON gateway to the Billing API.

    Translates method calls into requests made with an
    :class:`httpx.AsyncClient` and maps error responses onto the
    client's exception hierarchy:

    * HTTP 401/403 → :class:`AuthenticationError`
    * any other status >= 400 → :class:`APIError`
    * transport failures → :class:`APIConnectionError`
    * timeouts → :class:`APITimeoutError`

    The decoded error body is kept in ``exc.details`` so callers can show
    the server's ``message`` verbatim.  Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create an HttpGateway.

        Args:
            base_url: Base URL of the Billing API, e.g.
                ``"http://localhost:3000"``.
            timeout: HTTP request timeout in seconds.
            transport: Optional custom transport (``httpx.MockTransport``
                in tests).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # ------------------------------------------------------------------ #
    # Connection lifecycle
    # ------------------------------------------------------------------ #

    async def connect(self) -> None:
        """Create the underlying :class:`httpx.AsyncClient`."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Content-Type": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )
        logger.debug("gateway_connected", base_url=self._base_url)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Method call → HTTP translation
    # ------------------------------------------------------------------ #

    async def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        admin_pin: str | None = None,
    ) -> Any:
        """Translate a method call to an HTTP request.

        Raises:
            GatewayError: When not connected, on unknown method, or when a
                privileged method is called without a PIN.
            AuthenticationError: On HTTP 401/403.
            APIError: On any other HTTP error or a non-JSON body.
            APIConnectionError: On transport failure.
            APITimeoutError: When the request times out.
        """
        if self._client is None:
            raise GatewayError("HttpGateway not connected. Call await gw.connect() first.")

        if method not in _METHOD_ROUTES:
            raise GatewayError(f"HttpGateway: unknown method '{method}'.")

        verb, path, privileged = _METHOD_ROUTES[method]
        headers: dict[str, str] = {}
        if privileged:
            if not admin_pin:
                raise AuthenticationError(f"Admin PIN required for {method}")
            headers[ADMIN_PIN_HEADER] = admin_pin

        body = params or {}
        try:
            if verb == "GET":
                resp = await self._client.get(
                    path, params=body if body else None, headers=headers
                )
            else:
                resp = await self._client.request(verb, path, json=body, headers=headers)
        except httpx.TimeoutException as exc:
            logger.warning("gateway_timeout", method=method)
            raise APITimeoutError(f"Request timed out for {method}: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("gateway_connection_failed", method=method, error=str(exc))
            raise APIConnectionError(f"HTTP request failed for {method}: {exc}") from exc

        if resp.status_code >= 400:
            try:
                err_body = resp.json()
            except ValueError:
                err_body = {"raw": resp.text}
            if not isinstance(err_body, dict):
                err_body = {"raw": err_body}
            error_cls = AuthenticationError if resp.status_code in (401, 403) else APIError
            logger.info("gateway_http_error", method=method, status_code=resp.status_code)
            raise error_cls(
                f"Billing API returned HTTP {resp.status_code} for {method}",
                code=str(resp.status_code),
                details=err_body,
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise APIError(
                f"Non-JSON response from Billing API for {method}: {resp.text[:200]}",
                status_code=resp.status_code,
            ) from exc
