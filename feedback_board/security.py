from flask_talisman import Talisman


def init_security(app):
    """
    Production security headers. The app only serves JSON, so the CSP
    denies everything a browser could load from a response.
    """
    csp = {
        "default-src": ["'none'"],
        "frame-ancestors": ["'none'"],
        "base-uri": ["'none'"],
        "form-action": ["'none'"],
    }

    Talisman(
        app,
        content_security_policy=csp,
        force_https=bool(app.config.get("FORCE_HTTPS", True)),
        strict_transport_security=True,
        session_cookie_secure=True,
        frame_options="DENY",
        referrer_policy="strict-origin-when-cross-origin",
    )
