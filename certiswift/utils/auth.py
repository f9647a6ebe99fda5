"""
Admin session helpers
"""
import functools
import logging
from typing import Optional

from flask import jsonify, session

logger = logging.getLogger(__name__)

SESSION_KEY = 'admin_email'


def login_admin(email: str) -> None:
    session[SESSION_KEY] = email


def logout_admin() -> None:
    session.pop(SESSION_KEY, None)


def current_admin() -> Optional[str]:
    return session.get(SESSION_KEY)


def admin_required(view):
    """Reject the request with 401 unless an admin is logged in"""
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        if not current_admin():
            logger.warning(f"Unauthenticated admin request to {view.__name__}")
            return jsonify({'error': 'Admin authentication required'}), 401
        return view(*args, **kwargs)
    return wrapper
