from flask import Blueprint, current_app, jsonify, request

from ..auth import authenticated, requires, same_email
from ..checkout import PUBLIC_PAYMENT_PROJECTION, record_payment
from ..database import PAYMENTS, get_db, parse_object_ids, serialize_documents
from ..errors import InvalidPayload, load_payload
from ..gateway import amount_in_cents, create_payment_intent
from ..schemas import Payment, PaymentIntentRequest, normalize_email

payments_bp = Blueprint("payments", __name__)


@payments_bp.route("/create-payment-intent", methods=["POST"])
def create_intent():
    intent_request = load_payload(PaymentIntentRequest)
    client_secret = create_payment_intent(amount_in_cents(intent_request.price), currency="usd")
    return jsonify({"clientSecret": client_secret})


@payments_bp.route("/payments/<email>", methods=["GET"])
@requires(authenticated, same_email("email"))
def list_user_payments(email: str, principal):
    cursor = get_db()[PAYMENTS].find(
        {"email": normalize_email(email)}, PUBLIC_PAYMENT_PROJECTION
    ).sort("date", -1)
    return jsonify(serialize_documents(cursor))


@payments_bp.route("/payments", methods=["POST"])
def create_payment():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not isinstance(payload.get("cartIds"), list):
        raise InvalidPayload("cartIds is missing or is not an array")

    payment = load_payload(Payment)
    cart_object_ids = parse_object_ids(payment.cartIds, "cart item")
    parse_object_ids(payment.productItemIds, "product")

    outcome = record_payment(get_db(), payment.to_document(), cart_object_ids)
    current_app.logger.info(
        "Recorded payment %s for %s (%d cart items cleared)",
        outcome["paymentResult"]["insertedId"],
        payment.email,
        outcome["deleteResult"]["deletedCount"],
    )
    return jsonify(outcome)
