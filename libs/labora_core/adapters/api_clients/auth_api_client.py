from __future__ import annotations

from typing import Any

import requests

from labora_core.adapters.api_clients.base_api_client import BaseAPIClient
from labora_core.core.domain.exceptions import AuthError


class AuthAPIClient(BaseAPIClient):
    """
    Cliente dos endpoints de autenticação do armazenamento (dialeto GoTrue).
    Respostas de erro viram AuthError com o código e a mensagem do provedor.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        retries: int = 3,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url.rstrip("/") + "/auth/v1/",
            default_headers={"apikey": api_key, "Accept": "application/json"},
            timeout=timeout,
            retries=retries,
            session=session,
        )

    def _json_or_raise(self, resp: requests.Response) -> dict[str, Any]:
        if resp.status_code >= 400:
            code, message = self._error_code(resp), self._error_message(resp)
            self.log.info("auth.provider_error", status_code=resp.status_code, code=code, error=message)
            raise AuthError(code, message)
        if not resp.content:
            return {}
        return resp.json()

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        resp = self._send(
            "POST",
            "token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._json_or_raise(resp)

    def sign_up(
        self,
        email: str,
        password: str,
        redirect_to: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        resp = self._send(
            "POST",
            "signup",
            params={"redirect_to": redirect_to} if redirect_to else None,
            json={"email": email, "password": password, "data": data or {}},
        )
        return self._json_or_raise(resp)

    def sign_out(self, access_token: str) -> None:
        resp = self._send("POST", "logout", headers={"Authorization": f"Bearer {access_token}"})
        self._json_or_raise(resp)

    def get_user(self, access_token: str) -> dict[str, Any]:
        resp = self._send("GET", "user", headers={"Authorization": f"Bearer {access_token}"})
        return self._json_or_raise(resp)
