"""Mini README: Operator identity for the dashboard.

Structure:
    * Role - treasurer or member.
    * UserProfile - id, email and role of the signed-in operator.
    * IdentityProvider - exposes the current user and sign-out.

The profile is read from configuration. Treasurers can record transactions,
manage budgets, export reports and handle receipts; members only see the
dashboard, the transaction list and the calculator.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..configuration import FinanceTrackerSettings, get_settings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class Role(str, Enum):
    TREASURER = "treasurer"
    MEMBER = "member"


@dataclass(frozen=True, slots=True)
class UserProfile:
    """The operator the dashboard is running as."""

    id: str
    email: str
    role: Role

    @property
    def is_treasurer(self) -> bool:
        return self.role is Role.TREASURER

    def as_dict(self) -> Dict[str, str]:
        return {"id": self.id, "email": self.email, "role": self.role.value}


class IdentityProvider:
    """Serve the configured operator until they sign out."""

    def __init__(self, user: Optional[UserProfile] = None) -> None:
        self._user = user

    @classmethod
    def from_settings(cls, settings: Optional[FinanceTrackerSettings] = None) -> "IdentityProvider":
        settings = settings or get_settings()
        return cls(
            UserProfile(
                id=settings.operator_id,
                email=settings.operator_email,
                role=Role(settings.operator_role),
            )
        )

    def current_user(self) -> Optional[UserProfile]:
        return self._user

    def sign_out(self) -> None:
        if self._user is not None:
            LOGGER.info("Operator %s signed out", self._user.email)
        self._user = None

    def is_treasurer(self) -> bool:
        return self._user is not None and self._user.is_treasurer
