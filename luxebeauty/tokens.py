from datetime import timedelta
from typing import Dict, Optional

from flask import Flask, jsonify, request
from flask_jwt_extended import JWTManager, create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.exceptions import Forbidden

from .schemas import normalize_email

TOKEN_LIFETIME = timedelta(days=365)

jwt = JWTManager()


def init_tokens(app: Flask):
    app.config.setdefault("JWT_ACCESS_TOKEN_EXPIRES", TOKEN_LIFETIME)
    jwt.init_app(app)

    @jwt.unauthorized_loader
    def missing_token(reason: str):
        # A header with the wrong scheme is a bad credential, not a missing one.
        if request.headers.get("Authorization"):
            return jsonify({"message": "forbidden access"}), 403
        return jsonify({"message": "unauthorized access"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason: str):
        return jsonify({"message": "forbidden access"}), 403

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"message": "forbidden access"}), 403


def issue_token(claims: Dict[str, str], expires_delta: Optional[timedelta] = None) -> str:
    email = normalize_email(claims.get("email"))
    return create_access_token(
        identity=email,
        additional_claims={"email": email},
        expires_delta=expires_delta if expires_delta is not None else TOKEN_LIFETIME,
    )


def verify_token(token: str) -> Dict[str, str]:
    try:
        decoded = decode_token(token)
    except (JWTExtendedException, PyJWTError):
        raise Forbidden("forbidden access")
    return {"email": decoded.get("email") or decoded.get("sub")}
