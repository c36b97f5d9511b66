"""Reporter identification for API requests.

Authentication happens upstream; the gateway forwards the caller's
identity in X-User / X-User-Id headers. Anonymous submissions are
recorded as "Citizen".

Usage in routes:
    from dashboard.services.user import get_reporter

    user_name, user_id = get_reporter()
"""

from typing import Optional

from flask import request


def get_current_user() -> Optional[str]:
    """Get the caller's display name from request headers.

    Returns:
        User name if found, None otherwise.
    """
    x_user = request.headers.get("X-User") or request.headers.get("X-User-Name")
    if x_user and x_user.strip():
        return x_user.strip()
    return None


def get_current_user_id() -> Optional[str]:
    """Get the caller's id from the X-User-Id header."""
    user_id = request.headers.get("X-User-Id")
    if user_id and user_id.strip():
        return user_id.strip()
    return None


def get_reporter(json_key: str = "userName", default: str = "Citizen") -> tuple[str, Optional[str]]:
    """Resolve who submitted a report.

    Checks the JSON body (json_key), then the X-User header, then falls
    back to the default name.

    Returns:
        (user_name, user_id)
    """
    user = None

    body = request.get_json(silent=True) if request.is_json else None
    if isinstance(body, dict):
        value = body.get(json_key)
        if isinstance(value, str) and value.strip():
            user = value.strip()

    if not user:
        user = get_current_user()

    return user or default, get_current_user_id()
