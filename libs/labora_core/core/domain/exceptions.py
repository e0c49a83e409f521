from __future__ import annotations

from dataclasses import dataclass


class LaboraError(Exception):
    """Classe base para todas as exceções de domínio."""

    default_message = "Erro inesperado."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


@dataclass(frozen=True)
class FieldError:
    """Erro de um campo de formulário: caminho (``address.zip_code``) + mensagem."""
    path: str
    message: str


class ValidationError(LaboraError):
    """
    Um ou mais campos de formulário inválidos.
    Resolvido localmente: nunca chega ao armazenamento externo.
    """
    default_message = "Dados inválidos."

    def __init__(self, errors: list[FieldError], message: str | None = None) -> None:
        self.errors = list(errors)
        super().__init__(message)

    def as_dict(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for err in self.errors:
            grouped.setdefault(err.path, []).append(err.message)
        return grouped


class InvalidArgument(LaboraError):
    """Argumento inválido para uma operação de domínio (ex.: justificativa vazia)."""
    default_message = "Argumento inválido."


class InvalidStateTransition(LaboraError):
    """Transição de status não permitida a partir do estado atual."""

    def __init__(self, current: str, target: str, message: str | None = None) -> None:
        self.current = current
        self.target = target
        super().__init__(
            message or f"Transição inválida: orçamento está '{current}', não pode ir para '{target}'."
        )


class AuthError(LaboraError):
    """
    Falha de autenticação (login / cadastro).
    `code` identifica o motivo devolvido pelo provedor.
    """
    default_message = "Email ou senha incorretos"

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        super().__init__(message)


class PersistenceError(LaboraError):
    """
    Falha de leitura/escrita no armazenamento externo.
    Não é retentada automaticamente.
    """
    default_message = "Erro ao acessar os dados. Tente novamente."

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(PersistenceError):
    """Registro inexistente no armazenamento externo."""
    default_message = "Registro não encontrado."


class ExportError(LaboraError):
    """Falha ao gerar o documento PDF; nenhum arquivo parcial é entregue."""
    default_message = "Erro ao gerar PDF. Tente novamente."
