from datetime import datetime, timezone

from bson import ObjectId


def post_review(client, product_id, text, date):
    response = client.post("/reviews", json={"productId": product_id, "review": text, "date": date, "rating": 4})
    assert response.status_code == 200
    return response.get_json()["insertedId"]


def test_reviews_for_product_are_newest_first(client):
    post_review(client, "p1", "okay", "2024-01-05T10:00:00Z")
    post_review(client, "p2", "other product", "2024-03-01T10:00:00Z")
    post_review(client, "p1", "love it", "2024-02-10T08:30:00Z")
    post_review(client, "p1", "first!", "2023-12-24T18:00:00Z")

    reviews = client.get("/reviews/p1").get_json()

    assert [review["review"] for review in reviews] == ["love it", "okay", "first!"]
    assert all(review["productId"] == "p1" for review in reviews)
    assert reviews[0]["date"] == "2024-02-10T08:30:00Z"


def test_list_all_reviews(client):
    post_review(client, "p1", "nice", "2024-01-05T10:00:00Z")
    post_review(client, "p2", "meh", "2024-01-06T10:00:00Z")

    assert len(client.get("/reviews").get_json()) == 2


def test_review_requires_text(client, db):
    response = client.post("/reviews", json={"productId": "p1"})

    assert response.status_code == 400
    assert db.reviews.count_documents({}) == 0


def test_edit_review_replaces_text_and_restamps_date(client, db):
    review_id = post_review(client, "p1", "okay", "2020-01-01T00:00:00Z")

    response = client.put(f"/reviews/{review_id}", json={"review": "better than expected"})

    assert response.get_json()["modifiedCount"] == 1
    stored = db.reviews.find_one({"_id": ObjectId(review_id)})
    assert stored["review"] == "better than expected"
    assert stored["date"].year > 2020
    assert stored["rating"] == 4


def test_delete_review(client, db):
    review_id = post_review(client, "p1", "okay", "2024-01-01T00:00:00Z")

    response = client.delete(f"/reviews/{review_id}")

    assert response.get_json() == {"acknowledged": True, "deletedCount": 1}
    assert db.reviews.count_documents({}) == 0


def test_review_without_date_is_stamped_in_naive_utc(client, db):
    before = datetime.now(timezone.utc).replace(tzinfo=None)

    review_id = client.post("/reviews", json={"productId": "p1", "review": "fresh"}).get_json()["insertedId"]

    stored = db.reviews.find_one({"_id": ObjectId(review_id)})
    assert stored["date"].tzinfo is None
    assert stored["date"] >= before.replace(microsecond=0)
