"""Custom validators"""

from email_validator import validate_email, EmailNotValidError

# Largest value a signed 64-bit INTEGER column holds
MAX_DB_INTEGER = 2**63 - 1

# Upper bound for a single add-to-cart request
MAX_CART_QUANTITY = 10_000


def validate_email_address(email: str) -> str:
    """Validate and normalize email"""
    email = (email or "").strip().lower()

    try:
        validation = validate_email(email, check_deliverability=False)
        return validation.normalized
    except EmailNotValidError as e:
        raise ValueError(str(e))
