from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def normalize_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Please enter a valid email address")
    return email


def optional_text(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip()
