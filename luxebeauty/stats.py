from typing import Dict, List

from .database import PAYMENTS, PRODUCTS, USERS

REVENUE_PIPELINE = [
    {"$group": {"_id": None, "totalRevenue": {"$sum": "$price"}}},
]


def build_order_stats_pipeline() -> List[Dict]:
    return [
        {"$unwind": "$productItemIds"},
        {"$addFields": {"productItemIds": {"$toObjectId": "$productItemIds"}}},
        {
            "$lookup": {
                "from": PRODUCTS,
                "localField": "productItemIds",
                "foreignField": "_id",
                "as": "productItems",
            }
        },
        {"$unwind": "$productItems"},
        {
            "$group": {
                "_id": "$productItems.category",
                "quantity": {"$sum": 1},
                "revenue": {
                    "$sum": {
                        "$convert": {
                            "input": "$productItems.price",
                            "to": "double",
                            "onError": 0,
                            "onNull": 0,
                        }
                    }
                },
            }
        },
        {"$project": {"_id": 0, "category": "$_id", "quantity": 1, "revenue": 1}},
    ]


def compute_admin_stats(db) -> Dict:
    revenue_rows = list(db[PAYMENTS].aggregate(REVENUE_PIPELINE))
    revenue = revenue_rows[0]["totalRevenue"] if revenue_rows else 0
    return {
        "users": db[USERS].estimated_document_count(),
        "productItems": db[PRODUCTS].estimated_document_count(),
        "orders": db[PAYMENTS].estimated_document_count(),
        "revenue": revenue,
    }


def compute_order_stats(db) -> List[Dict]:
    return list(db[PAYMENTS].aggregate(build_order_stats_pipeline()))
