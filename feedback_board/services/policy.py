import hmac
from functools import wraps

from flask import current_app, request

from feedback_board.errors import Unauthorized

ADMIN_TOKEN_HEADER = "x-admin-token"


def verify_admin_token(token: str | None) -> bool:
    """True when ``token`` equals the configured admin secret."""
    secret = current_app.config.get("ADMIN_TOKEN")
    if not token or not secret:
        return False
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


def require_admin():
    """Raise Unauthorized unless the request carries the admin token."""
    if not verify_admin_token(request.headers.get(ADMIN_TOKEN_HEADER)):
        current_app.logger.info(
            "admin_token_rejected",
            extra={"event": "admin_token_rejected", "path": request.path, "method": request.method},
        )
        raise Unauthorized()


def admin_required(fn):
    @wraps(fn)
    def _wrap(*args, **kwargs):
        require_admin()
        return fn(*args, **kwargs)
    return _wrap
