from __future__ import annotations

import json
import logging
import uuid
from dataclasses import asdict, dataclass
from typing import List, Optional

from autodash.core.exceptions import AuthError
from autodash.services.storage import StorageBackend

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class User:
    id: str
    email: str
    name: str


def _user_key(email: str) -> str:
    return uuid.uuid5(uuid.NAMESPACE_URL, f"mailto:{email.lower()}").hex


class AuthService:
    """
    Mock authentication: nothing is verified beyond basic shape checks.

    The signed-in user of each browser session is kept as a JSON record in storage
    (`sessions/<session_id>/user.json`); registered profiles live under `users/`.
    Passwords are never stored.
    """

    def __init__(self, storage: StorageBackend):
        self.storage = storage

    @staticmethod
    def _session_path(session_id: str) -> str:
        return f"sessions/{session_id}/user.json"

    @staticmethod
    def _check_credentials(email: str, password: str) -> str:
        email = (email or "").strip()
        if "@" not in email:
            raise AuthError("Please enter a valid email address.")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return email

    def _sign_in(self, session_id: str, user: User) -> User:
        self.storage.write_json(self._session_path(session_id), asdict(user))
        logger.info("User signed in", extra={"session_id": session_id, "user_id": user.id})
        return user

    def register(self, session_id: str, name: str, email: str, password: str) -> User:
        email = self._check_credentials(email, password)
        name = (name or "").strip()
        if not name:
            raise AuthError("Please enter your name.")

        user = User(id=_user_key(email), email=email, name=name)
        self.storage.write_json(f"users/{user.id}.json", asdict(user))
        return self._sign_in(session_id, user)

    def login(self, session_id: str, email: str, password: str) -> User:
        try:
            email = self._check_credentials(email, password)
        except AuthError:
            raise AuthError("Invalid credentials")

        user_id = _user_key(email)
        profile_path = f"users/{user_id}.json"
        if self.storage.exists(profile_path):
            user = User(**self.storage.read_json(profile_path))
        else:
            user = User(id=user_id, email=email, name=email.split("@")[0])
        return self._sign_in(session_id, user)

    def logout(self, session_id: str) -> None:
        self.storage.delete(self._session_path(session_id))
        logger.info("User signed out", extra={"session_id": session_id})

    def current_user(self, session_id: str) -> Optional[User]:
        path = self._session_path(session_id)
        if not self.storage.exists(path):
            return None
        try:
            return User(**self.storage.read_json(path))
        except (json.JSONDecodeError, TypeError):
            logger.exception("Failed to load user record for session %s", session_id)
            return None

    def registered_users(self) -> List[User]:
        return [User(**self.storage.read_json(p)) for p in self.storage.list_files("users", ".json")]
