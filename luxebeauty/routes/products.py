import re
from typing import Dict

from flask import Blueprint, jsonify, request

from ..auth import admin, authenticated, requires
from ..database import (
    PRODUCTS,
    delete_ack,
    get_db,
    insert_ack,
    parse_object_id,
    serialize_document,
    serialize_documents,
    update_ack,
)
from ..errors import load_payload
from ..schemas import Product, ProductUpdate

products_bp = Blueprint("products", __name__)

EXACT_FILTER_FIELDS = ("category", "brand", "gender")
SEARCH_FIELDS = ("name", "category")


def build_search_query(search_term: str) -> Dict[str, object]:
    pattern = re.escape(search_term)
    return {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]}


@products_bp.route("/product", methods=["GET"])
def list_products():
    query = {
        field: request.args[field]
        for field in EXACT_FILTER_FIELDS
        if request.args.get(field)
    }
    return jsonify(serialize_documents(get_db()[PRODUCTS].find(query)))


@products_bp.route("/products", methods=["GET"])
def search_products():
    search_term = (request.args.get("query") or "").strip()
    return jsonify(serialize_documents(get_db()[PRODUCTS].find(build_search_query(search_term))))


@products_bp.route("/product/<product_id>", methods=["GET"])
def get_product(product_id: str):
    product_object_id = parse_object_id(product_id, "product")
    return jsonify(serialize_document(get_db()[PRODUCTS].find_one({"_id": product_object_id})))


@products_bp.route("/product", methods=["POST"])
@requires(authenticated, admin)
def create_product(principal):
    product = load_payload(Product)
    result = get_db()[PRODUCTS].insert_one(product.to_document())
    return jsonify(insert_ack(result))


@products_bp.route("/product/<product_id>", methods=["PATCH"])
def update_product(product_id: str):
    product_object_id = parse_object_id(product_id, "product")
    changes = load_payload(ProductUpdate)
    result = get_db()[PRODUCTS].update_one(
        {"_id": product_object_id}, {"$set": changes.to_update()}
    )
    return jsonify(update_ack(result))


@products_bp.route("/product/<product_id>", methods=["DELETE"])
@requires(authenticated, admin)
def delete_product(product_id: str, principal):
    product_object_id = parse_object_id(product_id, "product")
    result = get_db()[PRODUCTS].delete_one({"_id": product_object_id})
    return jsonify(delete_ack(result))
