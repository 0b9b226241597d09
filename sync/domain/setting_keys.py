"""
Known setting keys of the sync engine.
"""

API_URL = "api_url"
ADMIN_SECRET = "admin_secret"

KNOWN_KEYS = (API_URL, ADMIN_SECRET)
SECRET_KEYS = (ADMIN_SECRET,)


def mask_secret(value: str) -> str:
    """Show only the last two characters of a secret."""
    if not value:
        return ""
    if len(value) <= 2:
        return "*" * len(value)
    return "*" * (len(value) - 2) + value[-2:]
