import structlog
from django.conf import settings
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from labora_core.adapters.config import composition_root
from labora_core.adapters.observability.decorators import track_http
from labora_core.core.application.dtos.auth_dto import AuthSessionDTO, CredentialsInput, SignUpInput
from labora_core.core.application.services.auth_service import SIGN_UP_PENDING_LOGIN, AuthService
from labora_core.core.application.services.form_validation import validate_credentials, validate_sign_up
from labora_core.core.domain.exceptions import AuthError, ValidationError
from plugins.django_interface.permissions import HasStoreSession
from plugins.django_interface.serializers.core_serializers import AuthUserSerializer

logger = structlog.get_logger(__name__)


def auth_service() -> AuthService:
    return composition_root.container.auth_service()


def _session_response(session: AuthSessionDTO, message: str, code: int) -> Response:
    resp = Response(
        {
            "message": message,
            "user": AuthUserSerializer(session.user).data,
            "access_token": session.access_token,
            "expires_in": session.expires_in,
        },
        status=code,
    )
    # Configura cookie seguro
    resp.set_cookie(
        settings.AUTH_COOKIE_NAME,
        session.access_token,
        max_age=min(session.expires_in, settings.AUTH_COOKIE_MAX_AGE),
        secure=settings.AUTH_COOKIE_SECURE,
        httponly=settings.AUTH_COOKIE_HTTPONLY,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )
    return resp


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("LoginView_post")
    def post(self, request):
        data = CredentialsInput.model_validate(request.data)
        errors = validate_credentials(data)
        if errors:
            raise ValidationError(errors)

        session = auth_service().sign_in(data.email.strip(), data.password)
        return _session_response(session, "Autenticado com sucesso.", status.HTTP_200_OK)


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("RegisterView_post")
    def post(self, request):
        data = SignUpInput.model_validate(request.data)
        errors = validate_sign_up(data)
        if errors:
            raise ValidationError(errors)

        session = auth_service().sign_up(data.email.strip(), data.password)
        if session is None:
            return Response({"message": SIGN_UP_PENDING_LOGIN}, status=status.HTTP_201_CREATED)
        return _session_response(session, "Conta criada com sucesso!", status.HTTP_201_CREATED)


class LogoutView(APIView):
    permission_classes = [HasStoreSession]

    @track_http("LogoutView_post")
    def post(self, request):
        try:
            auth_service().sign_out(request.auth)
        except AuthError as exc:
            logger.warning("auth.sign_out_failed", code=exc.code)
        resp = Response({"message": "Logout realizado."}, status=status.HTTP_200_OK)
        # Destroi cookie
        resp.delete_cookie(settings.AUTH_COOKIE_NAME)
        return resp


class MeView(APIView):
    permission_classes = [HasStoreSession]

    def get(self, request):
        return Response(AuthUserSerializer(request.user).data)


class HealthCheckView(APIView):
    """
    Rota GET /api/healthz/ — retorna status 200 se a API estiver viva.
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        return Response({"status": "ok"}, status=status.HTTP_200_OK)
