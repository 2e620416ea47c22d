from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import normalize_email, optional_text, require_non_empty
from ..core.exceptions import DuplicateKeyError, EmailExistsError, MemberNotFoundError, ValidationError
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class MemberService:
    """Use case: register, list and remove members."""

    def __init__(self, members: MemberRepository):
        self._members = members

    def list_members(self) -> Sequence[Member]:
        return self._members.list_all()

    def email_exists(self, email: Optional[str]) -> bool:
        email = require_non_empty(email, "Email").lower()
        return self._members.get_by_email(email) is not None

    def register_member(
        self,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
        address: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> Member:
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name or not (isinstance(email, str) and email.strip()):
            raise ValidationError("Name and email are required")
        clean_email = normalize_email(email)

        if self._members.get_by_email(clean_email):
            logger.info("email %s already registered", clean_email)
            raise EmailExistsError(
                f'A member with email "{clean_email}" already exists. Please use a different email address.'
            )

        member = Member(
            member_id=str(uuid.uuid4()),
            name=clean_name,
            email=clean_email,
            phone=optional_text(phone),
            address=optional_text(address),
            created_at=now or now_utc(),
        )
        try:
            self._members.insert(member)
        except DuplicateKeyError as exc:
            # Lost a race with a concurrent registration; the unique index decided.
            raise EmailExistsError(
                "A member with this email address already exists. Please use a different email address."
            ) from exc

        logger.info("added member %s <%s>", member.name, member.email)
        return member

    def delete_member(self, member_id: str) -> None:
        if not self._members.delete_by_id(member_id):
            raise MemberNotFoundError("Member not found")
        logger.info("deleted member %s", member_id)
