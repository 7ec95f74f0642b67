"""User account management behind the MANAGE_USERS permission."""

from dataclasses import replace
from typing import Optional

from gymfix.database.models import User
from gymfix.database.repository import Repository
from gymfix.errors import PermissionDenied, ValidationFailed
from gymfix.utils.constants import MANAGE_USERS, ROLE_DEFAULT_PERMISSIONS

from .session import Session


def default_permissions(role: str) -> set[str]:
    """Permission set a freshly picked *role* starts with."""
    if role not in ROLE_DEFAULT_PERMISSIONS:
        raise ValidationFailed(f"Unknown role {role!r}")
    return set(ROLE_DEFAULT_PERMISSIONS[role])


class AccountService:
    def __init__(self, repo: Repository, session: Session):
        self.repo = repo
        self.session = session

    def create_user(self, name: str, email: str, password: str, role: str,
                    permissions: Optional[set[str]] = None,
                    phone: str = "", position: str = "") -> User:
        """Create an account; permissions default to the role's set."""
        self.session.require(MANAGE_USERS)
        if permissions is None:
            permissions = default_permissions(role)
        user = User(
            name=name, email=email, password=password, role=role,
            permissions=set(permissions), phone=phone, position=position,
        )
        self.repo.create_user(user)
        return user

    def update_user(self, user: User):
        self.session.require(MANAGE_USERS)
        self.repo.update_user(user)
        self.session.refresh(self.repo)

    def change_role(self, user_id: str, role: str,
                    reset_permissions: bool = True) -> User:
        """Switch a user's role, by default resetting to its permission set.

        Permissions stay the authority afterwards; later edits may
        diverge from the role default. Changing your own role takes
        effect in the running session at once.
        """
        self.session.require(MANAGE_USERS)
        user = self.repo.require_user(user_id)
        updated = replace(user, role=role, permissions=set(user.permissions))
        if reset_permissions:
            updated.permissions = default_permissions(role)
        self.repo.update_user(updated)
        self.session.refresh(self.repo)
        return updated

    def set_permissions(self, user_id: str, permissions: set[str]) -> User:
        self.session.require(MANAGE_USERS)
        user = self.repo.require_user(user_id)
        updated = replace(user, permissions=set(permissions))
        self.repo.update_user(updated)
        self.session.refresh(self.repo)
        return updated

    def delete_user(self, user_id: str):
        self.session.require(MANAGE_USERS)
        current = self.session.current_user
        if current is not None and current.id == user_id:
            raise ValidationFailed("You cannot delete your own account")
        self.repo.delete_user(user_id)

    def update_profile(self, phone: str, position: str, email: str) -> User:
        """Let the logged-in user edit their own contact details."""
        current = self.session.current_user
        if current is None:
            raise PermissionDenied("PROFILE")
        user = self.repo.require_user(current.id)
        updated = replace(user, phone=phone, position=position, email=email)
        self.repo.update_user(updated)
        self.session.refresh(self.repo)
        return updated
