"""
Email canonicalisation and stable user ids.

There is no user table: the same address always maps to the same id.
"""

import hashlib

USER_ID_LENGTH = 16


def normalize_email(email: str) -> str:
    return email.strip().lower()


def derive_user_id(email: str) -> str:
    digest = hashlib.sha256(normalize_email(email).encode("utf-8")).hexdigest()
    return digest[:USER_ID_LENGTH]
