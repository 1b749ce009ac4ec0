import json
import os
import threading

from pydantic import ValidationError

from studybudget.domain.accounts import MIN_NEW_PASSWORD_LENGTH, name_from_email, validate_password
from studybudget.logger import get_logger
from studybudget.models import UserProfile

logger = get_logger(__name__)


class ProfileError(ValueError):
    """A profile flow was rejected; the message is safe to show the user."""


class ProfileStore:
    """
    Single user profile persisted as one JSON document.

    Login is a mock: nothing is verified beyond the presence of an email and a
    password, and passwords are never stored.
    """

    def __init__(self, data_path: str = "profile.json"):
        self.data_path = data_path
        self._lock = threading.Lock()
        self.profile: UserProfile | None = None
        self.load()

    def load(self) -> None:
        if not os.path.exists(self.data_path):
            self.profile = None
            return
        try:
            with open(self.data_path, encoding="utf-8") as f:
                self.profile = UserProfile.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error("[PROFILE] Failed to load profile data: %s", e)
            self.profile = None

    def save(self, profile: UserProfile) -> UserProfile:
        with self._lock:
            with open(self.data_path, "w", encoding="utf-8") as f:
                json.dump(profile.model_dump(), f, indent=2)
            self.profile = profile
        return profile

    def get(self) -> UserProfile | None:
        return self.profile

    def login(self, email: str, password: str) -> UserProfile:
        if self.profile and self.profile.email == email:
            logger.info("[PROFILE] Signed in with saved profile.")
            return self.profile

        if not email or not password:
            raise ProfileError("Please enter both email and password.")

        logger.info("[PROFILE] No saved profile for this email; creating one.")
        return self.save(UserProfile(first_name=name_from_email(email), last_name="", email=email))

    def signup(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        confirm_password: str,
        terms_accepted: bool,
    ) -> UserProfile:
        if not terms_accepted:
            raise ProfileError("You must accept the Terms and Conditions to create an account.")
        if not (first_name and last_name and email and password):
            raise ProfileError("All fields are required.")

        password_error = validate_password(password)
        if password_error:
            raise ProfileError(password_error)
        if password != confirm_password:
            raise ProfileError("Passwords do not match.")

        return self.save(UserProfile(first_name=first_name, last_name=last_name, email=email))

    def update(self, changes: dict[str, str]) -> UserProfile:
        if self.profile is None:
            raise ProfileError("No profile is signed in.")
        return self.save(self.profile.model_copy(update=changes))

    def change_password(self, new_password: str, confirm_password: str) -> None:
        if new_password != confirm_password:
            raise ProfileError("Passwords do not match!")
        if len(new_password) < MIN_NEW_PASSWORD_LENGTH:
            raise ProfileError(f"Password must be at least {MIN_NEW_PASSWORD_LENGTH} characters!")
        logger.info("[PROFILE] Password change accepted.")

    def logout(self) -> None:
        with self._lock:
            if os.path.exists(self.data_path):
                os.remove(self.data_path)
            self.profile = None
        logger.info("[PROFILE] Signed out.")
