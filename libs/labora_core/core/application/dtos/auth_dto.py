from dataclasses import dataclass

from pydantic import BaseModel


class CredentialsInput(BaseModel):
    email: str = ""
    password: str = ""


class SignUpInput(CredentialsInput):
    confirm_password: str = ""


@dataclass(frozen=True)
class AuthUserDTO:
    id: str
    email: str


@dataclass(frozen=True)
class AuthSessionDTO:
    access_token: str
    refresh_token: str | None
    expires_in: int
    user: AuthUserDTO
