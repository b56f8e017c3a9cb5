"""In-memory user registry."""

from __future__ import annotations

import re

from .models.users import User

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


class UserManager:
    def __init__(self) -> None:
        self._users: list[User] = []

    def add_user(self, user: User) -> User:
        self._users.append(user)
        return user

    def get_user_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users if u.id == user_id), None)

    def get_users_by_tag(self, tag: str) -> list[User]:
        return [u for u in self._users if tag in u.tags]

    def get_active_users(self) -> list[User]:
        return [u for u in self._users if u.is_active]

    def calculate_average_age(self) -> float | None:
        """Mean age of users with a known age, or None when there are none."""
        ages = [u.age for u in self._users if u.age is not None]
        if not ages:
            return None
        return sum(ages) / len(ages)

    @staticmethod
    def validate_email(email: str) -> bool:
        return _EMAIL_RE.fullmatch(email) is not None

    @staticmethod
    def generate_user_summary(user: User) -> str:
        return f"{user.name} ({user.email}) - Active: {str(user.is_active).lower()}"

    def clear_users(self) -> None:
        self._users = []

    def __len__(self) -> int:
        return len(self._users)
