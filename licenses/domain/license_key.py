"""
License key generation.

Keys are opaque random tokens. They are not signed and carry no
information; verification always goes back to the store.
"""

import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits


def generate_license_key(prefix: str, groups: int = 4, group_size: int = 4) -> str:
    """
    Generate a license key in format: PREFIX-XXXX-XXXX-XXXX-XXXX.

    Args:
        prefix: Vendor prefix (e.g., 'FFW')
        groups: Number of random groups
        group_size: Characters per group

    Returns:
        Generated license key string
    """
    if not prefix or not prefix.isalnum():
        raise ValueError(f"Invalid license key prefix: {prefix!r}")
    parts = ["".join(secrets.choice(KEY_ALPHABET) for _ in range(group_size)) for _ in range(groups)]
    return f"{prefix.upper()}-{'-'.join(parts)}"
