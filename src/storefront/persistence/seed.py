"""Initial catalog, orders and mock accounts used when no saved state exists.

Stored in the same camelCase shape as the durable state keys.
"""

INITIAL_CATEGORIES = [
    {"id": "1", "name": "Electronics", "slug": "electronics", "image": "https://picsum.photos/400/300?random=1"},
    {"id": "2", "name": "Fashion", "slug": "fashion", "image": "https://picsum.photos/400/300?random=2"},
    {"id": "3", "name": "Home & Kitchen", "slug": "home", "image": "https://picsum.photos/400/300?random=3"},
    {"id": "4", "name": "Beauty & Care", "slug": "beauty", "image": "https://picsum.photos/400/300?random=4"},
]

INITIAL_PRODUCTS = [
    {
        "id": "p1",
        "name": "Smart Watch Pro",
        "description": "An advanced smart watch with activity and heart-rate tracking.",
        "price": 299,
        "category": "electronics",
        "image": "https://picsum.photos/500/500?random=10",
        "stock": 15,
        "rating": 4.5,
        "isFeatured": True,
        "reviews": [
            {
                "id": "r1",
                "userId": "u2",
                "userName": "Ahmed Ali",
                "rating": 5,
                "comment": "Excellent product!",
                "date": "2023-10-01",
            }
        ],
    },
    {
        "id": "p2",
        "name": "Wireless Headphones",
        "description": "High-quality headphones with active noise cancelling.",
        "price": 150,
        "category": "electronics",
        "image": "https://picsum.photos/500/500?random=11",
        "stock": 20,
        "rating": 4.8,
        "isFeatured": True,
        "reviews": [],
    },
    {
        "id": "p3",
        "name": "Leather Backpack",
        "description": "A stylish backpack made from genuine leather.",
        "price": 85,
        "category": "fashion",
        "image": "https://picsum.photos/500/500?random=12",
        "stock": 10,
        "rating": 4.2,
        "reviews": [],
    },
    {
        "id": "p4",
        "name": "Electric Fruit Blender",
        "description": "A powerful blender for fresh juice in seconds.",
        "price": 120,
        "category": "home",
        "image": "https://picsum.photos/500/500?random=13",
        "stock": 8,
        "rating": 4.0,
        "reviews": [],
    },
]

MOCK_ADMIN = {
    "id": "u1",
    "name": "Store Admin",
    "email": "admin@store.com",
    "role": "ADMIN",
    "avatar": "https://picsum.photos/100/100?random=100",
}

MOCK_CUSTOMER = {
    "id": "u2",
    "name": "Mohammed Khaled",
    "email": "customer@mail.com",
    "role": "CUSTOMER",
    "avatar": "https://picsum.photos/100/100?random=101",
}

INITIAL_ORDERS = [
    {
        "id": "ord1",
        "userId": "u2",
        "items": [
            {
                "productId": "p1",
                "name": "Smart Watch Pro",
                "price": 299,
                "quantity": 1,
                "image": "https://picsum.photos/500/500?random=10",
            }
        ],
        "total": 299,
        "status": "DELIVERED",
        "date": "2023-09-15",
        "shippingAddress": "Riyadh, Saudi Arabia",
    },
    {
        "id": "ord2",
        "userId": "u2",
        "items": [
            {
                "productId": "p3",
                "name": "Leather Backpack",
                "price": 85,
                "quantity": 2,
                "image": "https://picsum.photos/500/500?random=12",
            }
        ],
        "total": 170,
        "status": "PROCESSING",
        "date": "2023-11-20",
        "shippingAddress": "Jeddah, Saudi Arabia",
    },
]
