from flask import Blueprint, jsonify
from pymongo.errors import DuplicateKeyError

from ..auth import admin, authenticated, requires, same_email
from ..database import USERS, delete_ack, get_db, insert_ack, parse_object_id, serialize_documents, update_ack
from ..errors import load_payload
from ..schemas import TokenRequest, User
from ..tokens import issue_token

users_bp = Blueprint("users", __name__)

ALREADY_EXISTING = {"message": "user already existing", "insertedId": None}


@users_bp.route("/jwt", methods=["POST"])
def create_token():
    payload = load_payload(TokenRequest)
    return jsonify({"token": issue_token({"email": payload.email})})


@users_bp.route("/users", methods=["GET"])
@requires(authenticated, admin)
def list_users(principal):
    return jsonify(serialize_documents(get_db()[USERS].find()))


@users_bp.route("/users/admin/<email>", methods=["GET"])
@requires(authenticated, same_email("email"))
def check_admin(email: str, principal):
    return jsonify({"admin": principal.is_admin})


@users_bp.route("/users", methods=["POST"])
def create_user():
    user = load_payload(User)
    users = get_db()[USERS]
    if users.find_one({"email": user.email}):
        return jsonify(ALREADY_EXISTING)
    try:
        result = users.insert_one(user.to_document())
    except DuplicateKeyError:
        # Lost a race with a concurrent signup for the same email.
        return jsonify(ALREADY_EXISTING)
    return jsonify(insert_ack(result))


@users_bp.route("/users/admin/<user_id>", methods=["PATCH"])
@requires(authenticated, admin)
def promote_user(user_id: str, principal):
    target_object_id = parse_object_id(user_id, "user")
    result = get_db()[USERS].update_one({"_id": target_object_id}, {"$set": {"role": "admin"}})
    return jsonify(update_ack(result))


@users_bp.route("/users/<user_id>", methods=["DELETE"])
@requires(authenticated, admin)
def delete_user(user_id: str, principal):
    target_object_id = parse_object_id(user_id, "user")
    result = get_db()[USERS].delete_one({"_id": target_object_id})
    return jsonify(delete_ack(result))
