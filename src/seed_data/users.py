"""
Seed data for user profiles.
IDs must match accounts in the identity provider for tokens to resolve.
"""

USERS = [
    {
        "id": "00000000-0000-4000-8000-000000000001",
        "email": "admin@zuluniner.com",
        "name": "ZuluNiner Admin",
        "company": "ZuluNiner",
        "role": "admin",
        "location": "Denver, CO",
    },
    {
        "id": "00000000-0000-4000-8000-000000000002",
        "email": "seller@example.com",
        "name": "Demo Seller",
        "company": None,
        "role": "user",
        "location": "Vero Beach, FL",
    },
]
