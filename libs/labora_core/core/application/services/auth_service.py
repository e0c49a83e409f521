from __future__ import annotations

from typing import Any, Protocol

import structlog

from labora_core.core.application.dtos.auth_dto import AuthSessionDTO, AuthUserDTO
from labora_core.core.domain.exceptions import AuthError

logger = structlog.get_logger(__name__)

EMAIL_NOT_CONFIRMED = "Email not confirmed"
SIGN_IN_FAILED = "Email ou senha incorretos"
SIGN_UP_FAILED = "Erro ao criar conta. Tente novamente."
SIGN_UP_PENDING_LOGIN = "Conta criada com sucesso! Faça login para continuar."


class AuthGateway(Protocol):
    """Provedor de identidade externo (endpoints de auth do armazenamento)."""

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]: ...

    def sign_up(
        self,
        email: str,
        password: str,
        redirect_to: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...

    def sign_out(self, access_token: str) -> None: ...

    def get_user(self, access_token: str) -> dict[str, Any]: ...


def _user_from(payload: dict[str, Any]) -> AuthUserDTO:
    return AuthUserDTO(id=str(payload.get("id", "")), email=payload.get("email") or "")


def _session_from(payload: dict[str, Any]) -> AuthSessionDTO | None:
    token = payload.get("access_token")
    if not token:
        return None
    return AuthSessionDTO(
        access_token=token,
        refresh_token=payload.get("refresh_token"),
        expires_in=int(payload.get("expires_in") or 3600),
        user=_user_from(payload.get("user") or {}),
    )


def _is_unconfirmed(exc: AuthError) -> bool:
    return exc.code == "email_not_confirmed" or exc.message == EMAIL_NOT_CONFIRMED


class AuthService:
    """
    Login, cadastro e sessão sobre o provedor externo.

    Contas com e-mail ainda não confirmado são reenviadas ao cadastro
    (metadado ``email_confirm``) e o login é tentado mais uma vez.
    """

    def __init__(self, gateway: AuthGateway, redirect_url: str | None = None):
        self.gateway = gateway
        self.redirect_url = redirect_url

    def sign_in(self, email: str, password: str) -> AuthSessionDTO:
        log = logger.bind(email=email)
        try:
            session = self._sign_in_once(email, password)
        except AuthError as exc:
            if not _is_unconfirmed(exc):
                log.info("auth.sign_in_failed", code=exc.code)
                raise AuthError("invalid_credentials", SIGN_IN_FAILED) from exc

            log.info("auth.email_not_confirmed_retry")
            try:
                self._register(email, password)
                session = self._sign_in_once(email, password)
            except AuthError as retry_exc:
                log.info("auth.sign_in_retry_failed", code=retry_exc.code)
                raise AuthError("invalid_credentials", SIGN_IN_FAILED) from retry_exc

        log.info("auth.signed_in", user_id=session.user.id)
        return session

    def sign_up(self, email: str, password: str) -> AuthSessionDTO | None:
        """
        Cria a conta e tenta entrar em seguida. Devolve None quando a conta
        foi criada mas o login imediato não foi possível.
        """
        log = logger.bind(email=email)
        try:
            self._register(email, password)
        except AuthError as exc:
            log.warning("auth.sign_up_failed", code=exc.code)
            raise AuthError("sign_up_failed", SIGN_UP_FAILED) from exc

        try:
            session = self._sign_in_once(email, password)
        except AuthError as exc:
            log.info("auth.sign_up_pending_login", code=exc.code)
            return None
        log.info("auth.signed_up", user_id=session.user.id)
        return session

    def sign_out(self, access_token: str) -> None:
        self.gateway.sign_out(access_token)

    def get_user(self, access_token: str) -> AuthUserDTO:
        return _user_from(self.gateway.get_user(access_token))

    # ───────────────────────── helpers ─────────────────────────
    def _sign_in_once(self, email: str, password: str) -> AuthSessionDTO:
        session = _session_from(self.gateway.sign_in_with_password(email, password))
        if session is None:
            raise AuthError("no_session", SIGN_IN_FAILED)
        return session

    def _register(self, email: str, password: str) -> None:
        self.gateway.sign_up(
            email,
            password,
            redirect_to=self.redirect_url,
            data={"email_confirm": True},
        )
