from flask import Flask

from .bookings import bookings_bp
from .carts import carts_bp
from .payments import payments_bp
from .products import products_bp
from .reviews import reviews_bp
from .stats import stats_bp
from .users import users_bp

BLUEPRINTS = (users_bp, products_bp, reviews_bp, carts_bp, payments_bp, stats_bp, bookings_bp)


def register_blueprints(app: Flask):
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
