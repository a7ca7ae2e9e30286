from typing import Dict, List, Optional, Type, TypeVar

from flask import Flask, jsonify, request
from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError
from werkzeug.exceptions import BadRequest, HTTPException

ModelT = TypeVar("ModelT", bound=BaseModel)


class InvalidPayload(BadRequest):
    def __init__(self, description: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(description)
        self.errors = errors or []


class PaymentGatewayError(Exception):
    """The payment provider rejected or failed a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def describe_validation_errors(exc: ValidationError) -> List[Dict[str, str]]:
    described = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        described.append({"field": location, "message": error.get("msg", "Invalid value.")})
    return described


def load_payload(model: Type[ModelT]) -> ModelT:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidPayload("Request body must be a JSON object.")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InvalidPayload("Request body failed validation.", describe_validation_errors(exc))


def register_error_handlers(app: Flask):
    @app.errorhandler(InvalidPayload)
    def handle_invalid_payload(exc: InvalidPayload):
        body: Dict[str, object] = {"message": exc.description}
        if exc.errors:
            body["errors"] = exc.errors
        return jsonify(body), exc.code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    @app.errorhandler(PaymentGatewayError)
    def handle_payment_gateway_error(exc: PaymentGatewayError):
        app.logger.error("Payment provider error: %s", exc.message)
        return jsonify({"message": exc.message}), 500

    @app.errorhandler(PyMongoError)
    def handle_database_error(exc: PyMongoError):
        app.logger.exception("Database operation failed on %s %s", request.method, request.path)
        return jsonify({"message": "Database operation failed."}), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"message": "Internal server error"}), 500
