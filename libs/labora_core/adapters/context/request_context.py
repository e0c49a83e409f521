import contextvars

_access_token = contextvars.ContextVar("access_token", default=None)


def set_access_token(access_token: str | None):
    """Token of the authenticated session, forwarded to the data store."""
    return _access_token.set(access_token)


def get_access_token() -> str | None:
    return _access_token.get()


def reset_access_token(token):
    _access_token.reset(token)
