from datetime import datetime
from typing import Dict, List, Optional
from urllib.parse import quote_plus

from bson import ObjectId
from bson.errors import InvalidId
from flask import Flask, current_app
from flask_pymongo import PyMongo
from werkzeug.exceptions import BadRequest

DEFAULT_DB_HOST = "cluster0.nghfy93.mongodb.net"
DEFAULT_DB_NAME = "onlineCosmetic"

USERS = "users"
PRODUCTS = "product"
REVIEWS = "reviews"
CARTS = "carts"
PAYMENTS = "payments"

_EXTENSION_KEY = "luxebeauty.db"

mongo = PyMongo()


def build_mongo_uri(environ: Dict[str, str]) -> str:
    explicit_uri = (environ.get("MONGO_URI") or "").strip()
    if explicit_uri:
        return explicit_uri

    user = quote_plus(environ.get("DB_USER", "") or "")
    password = quote_plus(environ.get("DB_PASS", "") or "")
    host = (environ.get("DB_HOST") or DEFAULT_DB_HOST).strip()
    database_name = (environ.get("DB_NAME") or DEFAULT_DB_NAME).strip()
    return (
        f"mongodb+srv://{user}:{password}@{host}/{database_name}"
        "?retryWrites=true&w=majority&appName=Cluster0"
    )


def init_database(app: Flask, database=None):
    """Bind a database handle to the app.

    When ``database`` is given (tests pass a mongomock database) it is used as-is,
    otherwise Flask-PyMongo connects with ``MONGO_URI``.
    """
    if database is None:
        mongo.init_app(app)
        database = mongo.db
    app.extensions[_EXTENSION_KEY] = database
    return database


def get_db():
    return current_app.extensions[_EXTENSION_KEY]


def ensure_indexes(database):
    database[USERS].create_index("email", unique=True)
    database[REVIEWS].create_index([("productId", 1), ("date", -1)])
    database[CARTS].create_index("email")
    database[PAYMENTS].create_index([("email", 1), ("date", -1)])


# --- Serialization helpers ---


def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat() + ("Z" if value.tzinfo is None else "")
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: Optional[Dict]) -> Optional[Dict]:
    if document is None:
        return None
    return serialize_value(dict(document))


def serialize_documents(cursor) -> List[Dict]:
    return [serialize_document(document) for document in cursor]


def parse_object_id(value: str, label: str = "document") -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise BadRequest(f"Invalid {label} identifier.")


def parse_object_ids(values: List[str], label: str = "document") -> List[ObjectId]:
    return [parse_object_id(value, label) for value in values]


def insert_ack(result) -> Dict:
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_ack(result) -> Dict:
    upserted_id = result.upserted_id
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedCount": 1 if upserted_id is not None else 0,
        "upsertedId": str(upserted_id) if upserted_id is not None else None,
    }


def delete_ack(result) -> Dict:
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}
