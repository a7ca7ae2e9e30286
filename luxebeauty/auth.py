from functools import wraps
from typing import Callable, Dict, Optional

from flask import request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from werkzeug.exceptions import Forbidden, Unauthorized

from .database import USERS, get_db
from .schemas import normalize_email

FORBIDDEN_MESSAGE = "forbidden access"


class Principal:
    """The authenticated caller for one request.

    The stored user document is looked up at most once, the first time a gate or
    handler asks for it.
    """

    _unset = object()

    def __init__(self, email: str, claims: Optional[Dict] = None):
        self.email = normalize_email(email)
        self.claims = claims or {}
        self._user = self._unset

    @property
    def user(self) -> Optional[Dict]:
        if self._user is self._unset:
            self._user = get_db()[USERS].find_one({"email": self.email}) if self.email else None
        return self._user

    @property
    def is_admin(self) -> bool:
        return bool(self.user) and self.user.get("role") == "admin"


Gate = Callable[[Optional[Principal]], Optional[Principal]]


def authenticated(principal: Optional[Principal]) -> Principal:
    verify_jwt_in_request()
    claims = get_jwt()
    return Principal(claims.get("email") or get_jwt_identity(), claims)


def admin(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise Unauthorized("unauthorized access")
    if not principal.is_admin:
        raise Forbidden(FORBIDDEN_MESSAGE)
    return principal


def same_email(param: str = "email") -> Gate:
    def gate(principal: Optional[Principal]) -> Principal:
        if principal is None:
            raise Unauthorized("unauthorized access")
        requested_email = normalize_email((request.view_args or {}).get(param))
        if requested_email != principal.email:
            raise Forbidden(FORBIDDEN_MESSAGE)
        return principal

    return gate


def requires(*gates: Gate):
    """Run ``gates`` in order before the view and pass it the resolved principal."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = None
            for gate in gates:
                principal = gate(principal)
            return view(*args, principal=principal, **kwargs)

        return wrapper

    return decorator
