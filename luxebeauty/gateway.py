import requests
from flask import current_app

from .errors import PaymentGatewayError

DEFAULT_STRIPE_API_BASE = "https://api.stripe.com"


def amount_in_cents(price: float) -> int:
    # Truncates toward zero: 19.999 -> 1999, never rounded up.
    return int(price * 100)


def get_stripe_base_url() -> str:
    return (current_app.config.get("STRIPE_API_BASE") or DEFAULT_STRIPE_API_BASE).rstrip("/")


def create_payment_intent(amount: int, currency: str = "usd") -> str:
    secret_key = current_app.config.get("STRIPE_SECRET_KEY")
    if not secret_key:
        raise PaymentGatewayError("Payment provider is not configured.")
    if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
        raise ValueError(f"amount must be a non-negative integer, got {amount!r}")

    url = f"{get_stripe_base_url()}/v1/payment_intents"
    try:
        response = requests.post(
            url,
            data={
                "amount": amount,
                "currency": currency,
                "payment_method_types[]": "card",
            },
            auth=(secret_key, ""),
        )
    except requests.RequestException as exc:
        raise PaymentGatewayError(f"Payment provider unreachable: {exc}")

    if response.status_code != 200:
        try:
            details = response.json().get("error", {}).get("message")
        except ValueError:
            details = None
        raise PaymentGatewayError(
            details or "Failed to create payment intent.", status_code=response.status_code
        )

    client_secret = response.json().get("client_secret")
    if not client_secret:
        raise PaymentGatewayError("Payment provider returned no client secret.")
    return client_secret

