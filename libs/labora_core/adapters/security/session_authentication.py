from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from labora_core.adapters.context.request_context import set_access_token
from labora_core.core.domain.exceptions import AuthError


class SessionUser:
    """
    Usuário mínimo compatível com DRF, válido apenas durante a requisição.
    Só interessa saber se há sessão: não existem papéis.
    """
    def __init__(self, id: str, email: str = ""):
        self.id = id
        self.email = email
        self.is_authenticated = True

    def __str__(self):
        return f"<SessionUser id={self.id} email={self.email}>"


def _auth_service():
    from labora_core.adapters.config.composition_root import container
    return container.auth_service()


class StoreSessionAuthentication(BaseAuthentication):
    """
    Lê o token de `Authorization: Bearer <token>` ou do cookie
    (settings.AUTH_COOKIE_NAME), confirma a sessão no provedor de
    identidade e retorna (user, token).
    """
    keyword = "bearer"

    def _token(self, request) -> str | None:
        parts = request.headers.get("Authorization", "").split()
        if len(parts) == 2 and parts[0].lower() == self.keyword:  # noqa: PLR2004
            return parts[1]
        return request.COOKIES.get(settings.AUTH_COOKIE_NAME) or None

    def authenticate(self, request):
        token = self._token(request)
        if not token:
            return None

        try:
            user = _auth_service().get_user(token)
        except AuthError as e:
            raise exceptions.AuthenticationFailed("Sessão inválida ou expirada.") from e

        if not user.id:
            raise exceptions.AuthenticationFailed("Sessão inválida ou expirada.")

        set_access_token(token)
        return (SessionUser(id=user.id, email=user.email), token)

    def authenticate_header(self, request):
        return 'Bearer realm="api"'
