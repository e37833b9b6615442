"""
User Entity
"""

import re
from datetime import datetime
from typing import Optional

from demo_inventory.domain.exceptions import EntityValidationError
from demo_inventory.domain.product import utc_now

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class User:
    """A user account; username and email are stored lower-cased"""

    def __init__(
        self,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        is_active: bool = True,
        id: int = 0,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.username = username
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.is_active = is_active
        now = utc_now()
        self.created_at = created_at or now
        self.updated_at = updated_at or now

    @property
    def username(self) -> str:
        return self._username

    @username.setter
    def username(self, value: str) -> None:
        if _is_blank(value):
            raise EntityValidationError("Username cannot be null or empty.", "username")
        if len(value) < 3:
            raise EntityValidationError("Username must be at least 3 characters long.", "username")
        if len(value) > 50:
            raise EntityValidationError("Username cannot exceed 50 characters.", "username")
        if not USERNAME_PATTERN.fullmatch(value):
            raise EntityValidationError(
                "Username must contain only letters, numbers, and underscores.", "username"
            )
        self._username = value.strip().lower()

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        if _is_blank(value):
            raise EntityValidationError("Email cannot be null or empty.", "email")
        if len(value) > 254:
            raise EntityValidationError("Email cannot exceed 254 characters.", "email")
        if not EMAIL_PATTERN.fullmatch(value):
            raise EntityValidationError("Email format is invalid.", "email")
        self._email = value.strip().lower()

    @property
    def first_name(self) -> str:
        return self._first_name

    @first_name.setter
    def first_name(self, value: str) -> None:
        if _is_blank(value):
            raise EntityValidationError("First name cannot be null or empty.", "first_name")
        if len(value) > 100:
            raise EntityValidationError("First name cannot exceed 100 characters.", "first_name")
        self._first_name = value.strip()

    @property
    def last_name(self) -> str:
        return self._last_name

    @last_name.setter
    def last_name(self, value: str) -> None:
        if _is_blank(value):
            raise EntityValidationError("Last name cannot be null or empty.", "last_name")
        if len(value) > 100:
            raise EntityValidationError("Last name cannot exceed 100 characters.", "last_name")
        self._last_name = value.strip()

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    def validate(self) -> None:
        """Re-run every property validation on the current values."""
        self.username = self._username
        self.email = self._email
        self.first_name = self._first_name
        self.last_name = self._last_name

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self._username!r})"
