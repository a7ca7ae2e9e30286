from flask import Blueprint, jsonify

from ..auth import admin, authenticated, requires
from ..database import get_db, serialize_documents
from ..stats import compute_admin_stats, compute_order_stats

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("/admin-stats", methods=["GET"])
@requires(authenticated, admin)
def admin_stats(principal):
    return jsonify(compute_admin_stats(get_db()))


@stats_bp.route("/order-stats", methods=["GET"])
def order_stats():
    return jsonify(serialize_documents(compute_order_stats(get_db())))
