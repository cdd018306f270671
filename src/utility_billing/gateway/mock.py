from __future__ import annotations

from typing import Any, Callable

from utility_billing.gateway.base import Gateway

Response = Any | Callable[[dict[str, Any] | None], Any] | BaseException


class MockGateway(Gateway):
    """In-memory Gateway for testing.

    Usage::

        mock = MockGateway()
        mock.register("config.get", {"id": "c1", "ratePerUnit": 0.5, ...})  # static
        mock.register("bill.calculate", lambda p: {...})                     # dynamic
        mock.register("config.history", AuthenticationError("bad pin"))    # raises
        await mock.connect()

        result = await mock.call("config.get")
    """

    def __init__(self) -> None:
        self._connected = False
        self._responses: dict[str, Response] = {}
        self.calls: list[tuple[str, dict[str, Any] | None, str | None]] = []

    # ------------------------------------------------------------------ #
    # Registration helpers
    # ------------------------------------------------------------------ #

    def register(self, method: str, response: Response) -> None:
        """Register a static value, a callable receiving params, or an exception to raise."""
        self._responses[method] = response

    # ------------------------------------------------------------------ #
    # Gateway ABC implementation
    # ------------------------------------------------------------------ #

    async def connect(self) -> None:
        self._connected = True

    async def close(self) -> None:
        self._connected = False

    async def call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        *,
        admin_pin: str | None = None,
    ) -> Any:
        if not self._connected:
            raise RuntimeError("MockGateway not connected. Call await mock.connect() first.")
        self.calls.append((method, params, admin_pin))
        if method not in self._responses:
            raise KeyError(f"MockGateway: no response registered for method '{method}'")
        response = self._responses[method]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(params)
        return response

    # ------------------------------------------------------------------ #
    # Test helpers
    # ------------------------------------------------------------------ #

    def assert_called(self, method: str) -> None:
        methods = [c[0] for c in self.calls]
        assert method in methods, f"Expected call to '{method}', got: {methods}"

    def assert_not_called(self, method: str) -> None:
        methods = [c[0] for c in self.calls]
        assert method not in methods, f"Unexpected call to '{method}'"

    def call_count(self, method: str | None = None) -> int:
        if method is None:
            return len(self.calls)
        return sum(1 for m, _, _ in self.calls if m == method)

    def reset(self) -> None:
        self.calls.clear()
        self._responses.clear()
