import mongomock
import pytest

from luxebeauty import create_app

ADMIN_EMAIL = "admin@luxebeauty.com"
CUSTOMER_EMAIL = "customer@luxebeauty.com"

TEST_CONFIG = {
    "TESTING": True,
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "STRIPE_SECRET_KEY": "sk_test_luxebeauty",
    "STRIPE_API_BASE": "https://stripe.invalid",
}


@pytest.fixture
def db():
    return mongomock.MongoClient()["onlineCosmetic"]


@pytest.fixture
def app(db):
    return create_app(dict(TEST_CONFIG), database=db)


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def token_for(client, email):
    response = client.post("/jwt", json={"email": email})
    assert response.status_code == 200
    return response.get_json()["token"]


@pytest.fixture
def admin_headers(client, db):
    db.users.insert_one({"email": ADMIN_EMAIL, "name": "Ada Admin", "role": "admin"})
    return bearer(token_for(client, ADMIN_EMAIL))


@pytest.fixture
def customer_headers(client, db):
    db.users.insert_one({"email": CUSTOMER_EMAIL, "name": "Cory Customer"})
    return bearer(token_for(client, CUSTOMER_EMAIL))
