"""
Centralized catalog of the controlled errors raised by the entrega services.
Used for documentation and exposed read-only through the back-office.
"""

ERROR_CATALOG = {
    "AUTH_001": {
        "title": "Invalid Credentials",
        "description": "The email/username and password do not match an active account.",
        "http_code": 401,
    },
    "AUTH_002": {
        "title": "Not Authenticated",
        "description": "The request carries no valid access token for a customer or admin.",
        "http_code": 401,
    },
    "AUTH_003": {
        "title": "Too Many Attempts",
        "description": "Login attempts from this client exceeded the rate limit.",
        "http_code": 429,
    },
    "PERM_001": {
        "title": "Access Denied (Role)",
        "description": "The authenticated admin lacks the role required for the action.",
        "http_code": 403,
    },
    "OWN_001": {
        "title": "Not Found or Unauthorized",
        "description": (
            "The record does not exist or belongs to another user. Both cases are "
            "reported identically."
        ),
        "http_code": 404,
    },
    "CONFLICT_001": {
        "title": "Already Exists",
        "description": "The record would duplicate an existing one (profile, email, username).",
        "http_code": 409,
    },
    "VALID_001": {
        "title": "Invalid Data",
        "description": "The request payload failed validation.",
        "http_code": 400,
    },
    "CART_001": {
        "title": "Invalid Cart Quantity",
        "description": "Cart quantities must stay between 1 and the per-product maximum.",
        "http_code": 400,
    },
    "CHECK_001": {
        "title": "Order Without Items",
        "description": "Checkout attempted without any products.",
        "http_code": 400,
    },
    "CHECK_002": {
        "title": "Missing Delivery Address",
        "description": "Checkout attempted without a delivery address or a default address.",
        "http_code": 400,
    },
    "SYSTEM_001": {
        "title": "Internal Error",
        "description": "Unhandled server exception.",
        "http_code": 500,
    },
}
