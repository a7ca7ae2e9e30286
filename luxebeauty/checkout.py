from typing import Dict, List

from bson import ObjectId

from .database import CARTS, PAYMENTS, delete_ack, insert_ack

# Bookkeeping fields that stay internal to the checkout sequence.
PUBLIC_PAYMENT_PROJECTION = {"cartsCleared": 0}


def record_payment(db, payment_document: Dict, cart_object_ids: List[ObjectId]) -> Dict:
    """Store a payment and consume the cart rows it paid for.

    The payment is inserted with ``cartsCleared`` false first, so a crash before the
    cart cleanup finishes leaves a marker that ``resume_pending_checkouts`` picks up.
    """
    payment_result = db[PAYMENTS].insert_one({**payment_document, "cartsCleared": False})
    delete_result = db[CARTS].delete_many({"_id": {"$in": cart_object_ids}})
    db[PAYMENTS].update_one(
        {"_id": payment_result.inserted_id}, {"$set": {"cartsCleared": True}}
    )
    return {
        "paymentResult": insert_ack(payment_result),
        "deleteResult": delete_ack(delete_result),
    }


def resume_pending_checkouts(db) -> int:
    resumed = 0
    for payment in db[PAYMENTS].find({"cartsCleared": False}):
        cart_object_ids = [
            ObjectId(cart_id) for cart_id in payment.get("cartIds", []) if ObjectId.is_valid(cart_id)
        ]
        if cart_object_ids:
            db[CARTS].delete_many({"_id": {"$in": cart_object_ids}})
        db[PAYMENTS].update_one({"_id": payment["_id"]}, {"$set": {"cartsCleared": True}})
        resumed += 1
    return resumed
