"""Session state and the permission gate."""

import logging
from typing import Optional

from gymfix.database.models import User
from gymfix.errors import AuthenticationFailed, PermissionDenied

logger = logging.getLogger(__name__)


def has_permission(user: Optional[User], permission: str) -> bool:
    """True iff *permission* is in the user's permission set."""
    return user is not None and permission in user.permissions


class Session:
    """Holds the single logged-in user slot for the running app."""

    def __init__(self, user: Optional[User] = None):
        self.current_user = user

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def login(self, user: User):
        self.current_user = user
        logger.info("User %s logged in", user.email)

    def logout(self):
        if self.current_user is not None:
            logger.info("User %s logged out", self.current_user.email)
        self.current_user = None

    def authenticate(self, repo, email: str, password: str) -> User:
        """Check credentials against the user store and log the user in.

        Raises AuthenticationFailed for an unknown email or a wrong password.
        """
        user = repo.get_user_by_email(email)
        if user is None or user.password != password:
            logger.warning("Failed login attempt for %s", email)
            raise AuthenticationFailed(email)
        self.login(user)
        return user

    def refresh(self, repo):
        """Re-read the logged-in user from *repo* after their record changed.

        Logs out when the account no longer exists.
        """
        if self.current_user is None:
            return
        user = repo.get_user(self.current_user.id)
        if user is None:
            self.logout()
        else:
            self.current_user = user

    def has_permission(self, permission: str) -> bool:
        return has_permission(self.current_user, permission)

    def require(self, permission: str):
        """Raise PermissionDenied unless the current user holds *permission*."""
        if not self.has_permission(permission):
            name = self.current_user.name if self.current_user else ""
            logger.warning("Refused %s for %s", permission, name or "anonymous")
            raise PermissionDenied(permission, name)
