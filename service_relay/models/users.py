"""User dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Profile:
    bio: str
    website: str | None = None


@dataclass
class User:
    """Registered user as held by the in-memory registry."""

    id: int
    name: str
    email: str
    is_active: bool = True
    tags: list[str] = field(default_factory=list)
    age: int | None = None
    profile: Profile | None = None


@dataclass
class Recipient:
    """Notification target. Phone is optional; SMS is skipped without one."""

    email: str
    name: str
    phone: str | None = None
