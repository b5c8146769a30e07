"""Cosmetic login gate.

Nothing here checks a credential. Any non-empty email and password pair is
accepted; the gate only decides which screen the UI shows.
"""
from dataclasses import dataclass, replace

from core.functional import Maybe, Nothing, Some

FALLBACK_NAME = "User"


@dataclass(frozen=True)
class User:
    name: str
    email: str


def _local_part(email: str) -> str:
    return email.split("@")[0] if email else ""


def login(email: str, password: str) -> Maybe[User]:
    email, password = (email or "").strip(), (password or "").strip()
    if not email or not password:
        return Nothing()
    return Some(User(name=_local_part(email) or FALLBACK_NAME, email=email))


def register(name: str, email: str, password: str) -> Maybe[User]:
    email, password = (email or "").strip(), (password or "").strip()
    name = (name or "").strip() or _local_part(email)
    if not name or not email or not password:
        return Nothing()
    return Some(User(name=name, email=email))


def update_account(user: User, name: str, email: str) -> User:
    return replace(user, name=name.strip() or user.name, email=email.strip() or user.email)


def initials(name: str) -> str:
    letters = [word[0] for word in (name or "").split() if word][:2]
    return "".join(letters) or "?"
