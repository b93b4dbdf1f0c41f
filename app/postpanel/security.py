import secrets

from flask import Request, session


def ensure_csrf_token() -> str:
    """Return the session's form token, minting one on first use."""
    token = session.get("csrf_token")
    if not token:
        token = secrets.token_urlsafe(32)
        session["csrf_token"] = token
    return token


def validate_csrf(req: Request) -> bool:
    # Forms send `csrf_token`; scripted clients may use the header instead.
    token = req.headers.get("X-CSRF-Token") or req.form.get("csrf_token")
    return bool(token and secrets.compare_digest(token.encode(), (session.get("csrf_token") or "").encode()))
