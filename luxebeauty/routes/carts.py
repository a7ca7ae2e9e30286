from flask import Blueprint, jsonify, request

from ..database import CARTS, delete_ack, get_db, insert_ack, parse_object_id, serialize_documents
from ..errors import load_payload
from ..schemas import CartItem, normalize_email

carts_bp = Blueprint("carts", __name__)


@carts_bp.route("/carts", methods=["GET"])
def list_cart_items():
    query = {"email": normalize_email(request.args.get("email"))}
    return jsonify(serialize_documents(get_db()[CARTS].find(query)))


@carts_bp.route("/carts", methods=["POST"])
def add_cart_item():
    cart_item = load_payload(CartItem)
    result = get_db()[CARTS].insert_one(cart_item.to_document())
    return jsonify(insert_ack(result))


@carts_bp.route("/carts/<cart_id>", methods=["DELETE"])
def delete_cart_item(cart_id: str):
    cart_object_id = parse_object_id(cart_id, "cart item")
    result = get_db()[CARTS].delete_one({"_id": cart_object_id})
    return jsonify(delete_ack(result))
