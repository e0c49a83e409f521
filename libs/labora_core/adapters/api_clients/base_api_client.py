from __future__ import annotations

from typing import Any
from urllib.parse import urljoin

import requests
import structlog
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from labora_core.core.domain.exceptions import PersistenceError


class BaseAPIClient:
    """
    Utilitário HTTP simples com:
      • retry exponencial apenas para GET (escritas nunca são repetidas)
      • timeout configurável
      • falhas de rede convertidas em PersistenceError
    """

    def __init__(
        self,
        *,
        base_url: str,
        default_headers: dict[str, str] | None = None,
        timeout: float = 5.0,
        retries: int = 3,
        session: requests.Session | None = None,
    ) -> None:
        self.log = structlog.get_logger(__name__).bind(component=type(self).__name__)
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.log.debug("Configurando cliente", base_url=self.base_url, timeout=timeout)

        # sessão + retry -----------------------------------------------------------------
        self.session = session or requests.Session()
        if default_headers:
            self.session.headers.update(default_headers)

        retry_cfg = Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=frozenset({"GET"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_cfg)
        for scheme in ("https://", "http://"):
            self.session.mount(scheme, adapter)

    # ---------------------------------------------------------------------- utils -----
    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        """Extrai a mensagem de erro do corpo JSON (formatos PostgREST e GoTrue)."""
        try:
            body = resp.json()
        except ValueError:
            return resp.text or resp.reason or ""
        if not isinstance(body, dict):
            return str(body)
        for key in ("error_description", "msg", "message", "error"):
            if body.get(key):
                return str(body[key])
        return str(body)

    @staticmethod
    def _error_code(resp: requests.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return str(resp.status_code)
        if isinstance(body, dict):
            for key in ("error_code", "code", "error"):
                if body.get(key):
                    return str(body[key])
        return str(resp.status_code)

    # ---------------------------------------------------------------------- HTTP ------
    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Executa a requisição e devolve a resposta sem avaliar o status;
        cada cliente decide como traduzir respostas de erro.
        """
        url = urljoin(self.base_url, path.lstrip("/"))
        log = self.log.bind(method=method, url=url)
        log.debug("Enviando requisição")

        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.error("Falha de comunicação", error=str(exc))
            raise PersistenceError() from exc

        log.debug("Resposta recebida", status_code=resp.status_code)
        return resp
