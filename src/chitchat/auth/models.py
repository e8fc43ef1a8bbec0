"""
chitchat.auth.models

Auth domain models.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, built from a validated access token.
    """

    user_id: uuid.UUID
    email: str
    token_id: str
    expires_at: datetime
