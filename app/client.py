"""
Async HTTP client for the fee-management API.

Credentials are never stored as a shared default header: every request builds its
Authorization header from the ClientConfig the caller passes in, so two configs
(e.g. an admin and a student) can be used side by side.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

import httpx


class ApiError(Exception):
    """Non-2xx response; message is the envelope's `error` field when present."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = 10.0

    def with_token(self, token: Optional[str]) -> "ClientConfig":
        return replace(self, token=token)

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


class FeesApiClient:
    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "FeesApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        config: Optional[ClientConfig] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        cfg = config or self.config
        headers = {**kwargs.pop("headers", {}), **cfg.auth_headers()}
        response = await self._http.request(method, path, headers=headers, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.reason_phrase)
        return body

    # --- Auth ---
    async def register(self, **fields: Any) -> ClientConfig:
        """Register and return a config carrying the new token."""
        body = await self._request("POST", "/api/auth/register", json=fields)
        return self.config.with_token(body["token"])

    async def login(self, email: str, password: str) -> ClientConfig:
        body = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        return self.config.with_token(body["token"])

    async def me(self, config: Optional[ClientConfig] = None) -> Dict[str, Any]:
        return (await self._request("GET", "/api/auth/me", config))["data"]

    # --- Student ---
    async def list_fees(self, config: Optional[ClientConfig] = None) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/api/student/fees", config))["data"]

    async def get_fee(self, fee_id: Union[UUID, str], config: Optional[ClientConfig] = None) -> Dict[str, Any]:
        return (await self._request("GET", f"/api/student/fees/{fee_id}", config))["data"]

    async def pay_fee(
        self,
        fee_id: Union[UUID, str],
        amount: Union[Decimal, int, str],
        payment_method: str,
        transaction_id: Optional[str] = None,
        config: Optional[ClientConfig] = None,
    ) -> Dict[str, Any]:
        payload = {"amount": str(amount), "paymentMethod": payment_method}
        if transaction_id:
            payload["transactionId"] = transaction_id
        return (await self._request("POST", f"/api/student/fees/{fee_id}/pay", config, json=payload))["data"]

    async def list_payments(self, config: Optional[ClientConfig] = None) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/api/student/payments", config))["data"]

    async def get_receipt(self, payment_id: Union[UUID, str], config: Optional[ClientConfig] = None) -> Dict[str, Any]:
        return (await self._request("GET", f"/api/student/payments/{payment_id}/receipt", config))["data"]

    # --- Admin ---
    async def statistics(self, config: Optional[ClientConfig] = None) -> Dict[str, Any]:
        return (await self._request("GET", "/api/admin/statistics", config))["data"]
