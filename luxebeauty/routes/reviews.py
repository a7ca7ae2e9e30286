from flask import Blueprint, jsonify

from ..database import (
    REVIEWS,
    delete_ack,
    get_db,
    insert_ack,
    parse_object_id,
    serialize_documents,
    update_ack,
)
from ..errors import load_payload
from ..schemas import Review, ReviewEdit, utc_now

reviews_bp = Blueprint("reviews", __name__)


@reviews_bp.route("/reviews", methods=["GET"])
def list_reviews():
    return jsonify(serialize_documents(get_db()[REVIEWS].find()))


@reviews_bp.route("/reviews", methods=["POST"])
def create_review():
    review = load_payload(Review)
    result = get_db()[REVIEWS].insert_one(review.to_document())
    return jsonify(insert_ack(result))


@reviews_bp.route("/reviews/<product_id>", methods=["GET"])
def list_product_reviews(product_id: str):
    cursor = get_db()[REVIEWS].find({"productId": product_id}).sort("date", -1)
    return jsonify(serialize_documents(cursor))


@reviews_bp.route("/reviews/<review_id>", methods=["PUT"])
def update_review(review_id: str):
    review_object_id = parse_object_id(review_id, "review")
    edit = load_payload(ReviewEdit)
    result = get_db()[REVIEWS].update_one(
        {"_id": review_object_id}, {"$set": {"review": edit.review, "date": utc_now()}}
    )
    return jsonify(update_ack(result))


@reviews_bp.route("/reviews/<review_id>", methods=["DELETE"])
def delete_review(review_id: str):
    review_object_id = parse_object_id(review_id, "review")
    result = get_db()[REVIEWS].delete_one({"_id": review_object_id})
    return jsonify(delete_ack(result))
