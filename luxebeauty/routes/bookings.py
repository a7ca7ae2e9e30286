from flask import Blueprint, jsonify

from ..auth import admin, authenticated, requires
from ..checkout import PUBLIC_PAYMENT_PROJECTION
from ..database import PAYMENTS, get_db, parse_object_id, serialize_documents
from ..errors import load_payload
from ..schemas import BookingStatusUpdate

bookings_bp = Blueprint("bookings", __name__)


@bookings_bp.route("/manage-bookings", methods=["GET"])
@requires(authenticated, admin)
def list_bookings(principal):
    cursor = get_db()[PAYMENTS].find({}, PUBLIC_PAYMENT_PROJECTION).sort("date", -1)
    return jsonify(serialize_documents(cursor))


@bookings_bp.route("/manage-bookings/<booking_id>", methods=["PATCH"])
@requires(authenticated, admin)
def update_booking_status(booking_id: str, principal):
    booking_object_id = parse_object_id(booking_id, "booking")
    update = load_payload(BookingStatusUpdate)
    result = get_db()[PAYMENTS].update_one(
        {"_id": booking_object_id}, {"$set": {"status": update.status}}
    )
    return jsonify({"success": bool(result.modified_count), "status": update.status})


@bookings_bp.route("/manage-bookings/<booking_id>", methods=["DELETE"])
@requires(authenticated, admin)
def delete_booking(booking_id: str, principal):
    booking_object_id = parse_object_id(booking_id, "booking")
    result = get_db()[PAYMENTS].delete_one({"_id": booking_object_id})
    return jsonify({"success": bool(result.deleted_count)})
