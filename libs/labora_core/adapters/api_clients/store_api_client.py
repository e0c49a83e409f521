from __future__ import annotations

from collections.abc import Callable
from typing import Any

import requests
import structlog

from labora_core.adapters.api_clients.base_api_client import BaseAPIClient
from labora_core.adapters.context.request_context import get_access_token
from labora_core.adapters.observability.metrics import STORE_REQUEST_COUNT
from labora_core.core.domain.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


def eq(value: Any) -> str:
    return f"eq.{value}"


def ilike_any(columns: list[str], term: str) -> str:
    """Cláusula `or` de substring case-insensitive em várias colunas."""
    return ",".join(f"{col}.ilike.*{term}*" for col in columns)


def parse_content_range(header: str | None) -> int | None:
    """`0-9/57` → 57; `*/0` → 0; total desconhecido (`*`) → None."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


class StoreAPIClient(BaseAPIClient):
    """
    Cliente da API REST do armazenamento (dialeto PostgREST).

    Cada requisição leva a chave pública (`apikey`) e, como `Authorization`,
    o token da sessão corrente quando houver; sem sessão, a própria chave.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        retries: int = 3,
        token_provider: Callable[[], str | None] | None = get_access_token,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url.rstrip("/") + "/rest/v1/",
            default_headers={"apikey": api_key, "Accept": "application/json"},
            timeout=timeout,
            retries=retries,
            session=session,
        )
        self.api_key = api_key
        self.token_provider = token_provider

    # ---------------------------------------------------------------------- utils -----
    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        headers = {"Authorization": f"Bearer {token or self.api_key}"}
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _check(self, resp: requests.Response, method: str, table: str) -> None:
        if resp.status_code < 400:
            STORE_REQUEST_COUNT.labels(method, table, "ok").inc()
            return
        STORE_REQUEST_COUNT.labels(method, table, "error").inc()
        self.log.error(
            "store.request_failed",
            method=method,
            table=table,
            status_code=resp.status_code,
            error=self._error_message(resp),
        )
        raise PersistenceError(status_code=resp.status_code)

    def _rows(self, resp: requests.Response) -> list[dict[str, Any]]:
        if not resp.content:
            return []
        data = resp.json()
        return data if isinstance(data, list) else [data]

    # ---------------------------------------------------------------------- leitura ---
    def select(  # noqa: PLR0913
        self,
        table: str,
        *,
        filters: dict[str, str] | None = None,
        or_: str | None = None,
        order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        count: bool = False,
    ) -> tuple[list[dict[str, Any]], int | None]:
        """
        Lê linhas de `table`. `filters` já vem com o operador (`{"status": "eq.pending"}`).
        Com `count=True` devolve também o total de linhas (cabeçalho Content-Range).
        """
        params: list[tuple[str, str]] = [("select", "*")]
        params.extend((filters or {}).items())
        if or_:
            params.append(("or", f"({or_})"))
        if order:
            params.append(("order", order))
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset:
            params.append(("offset", str(offset)))

        resp = self._send(
            "GET",
            table,
            params=params,
            headers=self._headers("count=exact" if count else None),
        )
        self._check(resp, "GET", table)
        rows = self._rows(resp)
        total = parse_content_range(resp.headers.get("Content-Range")) if count else None
        if count and total is None:
            total = len(rows)
        return rows, total

    # ---------------------------------------------------------------------- escrita ---
    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        resp = self._send("POST", table, json=row, headers=self._headers("return=representation"))
        self._check(resp, "POST", table)
        rows = self._rows(resp)
        if not rows:
            raise PersistenceError("Resposta vazia ao inserir registro.")
        return rows[0]

    def update(self, table: str, values: dict[str, Any], filters: dict[str, str]) -> list[dict[str, Any]]:
        """
        PATCH condicional: apenas as linhas que casam com `filters` são alteradas.
        Lista vazia significa que nenhuma linha casou.
        """
        resp = self._send(
            "PATCH",
            table,
            params=list(filters.items()),
            json=values,
            headers=self._headers("return=representation"),
        )
        self._check(resp, "PATCH", table)
        return self._rows(resp)
