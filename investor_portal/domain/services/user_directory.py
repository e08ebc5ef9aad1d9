"""
Optional investor directory used to enrich session identities.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Dict, Optional

from investor_portal.domain.models import UserProfile
from investor_portal.domain.services.identity import normalize_email

logger = logging.getLogger(__name__)

GUEST_NAME = "Guest"
GUEST_ROLE = "Guest"


def default_name_from_email(email: str) -> str:
    handle = email.split("@")[0] if email else ""
    parts = [segment for segment in re.split(r"[._\-\s]+", handle) if segment]
    if not parts:
        return GUEST_NAME
    return " ".join(segment[0].upper() + segment[1:] for segment in parts)


class UserDirectory:
    """Case-insensitive lookup of directory entries by email."""

    def __init__(self, entries: Optional[Dict[str, dict]] = None):
        self._entries: Dict[str, dict] = entries or {}

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "UserDirectory":
        if not raw:
            return cls()
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse USER_DIRECTORY_JSON: %s", exc)
            return cls()

        if not isinstance(parsed, list):
            logger.warning("USER_DIRECTORY_JSON must be a list, got %s", type(parsed).__name__)
            return cls()

        entries: Dict[str, dict] = {}
        for item in parsed:
            if not isinstance(item, dict) or not isinstance(item.get("email"), str):
                continue
            email = normalize_email(item["email"])
            if email:
                entries[email] = item
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def resolve_user_profile(self, email: str, user_id: str) -> UserProfile:
        normalized = normalize_email(email)
        entry = self._entries.get(normalized)
        if entry:
            return UserProfile(
                user_id=user_id,
                email=normalized,
                name=entry.get("name") or default_name_from_email(normalized),
                organization=entry.get("organization"),
                role=entry.get("role"),
            )

        return UserProfile(
            user_id=user_id,
            email=normalized,
            name=default_name_from_email(normalized),
            organization=None,
            role=GUEST_ROLE,
        )
