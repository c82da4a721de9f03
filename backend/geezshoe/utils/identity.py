# backend/geezshoe/utils/identity.py
"""
Identity service: email/password sign-in identities with free-form metadata.

Admin records in the application table point at these identities by id.
"""
import logging
import uuid
from typing import Optional

from email_validator import validate_email, EmailNotValidError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from geezshoe.errors import IdentityError
from geezshoe.models.admin import AuthUser
from geezshoe.utils.hashing import get_password_hash, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class IdentityService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> Optional[AuthUser]:
        return self.db.query(AuthUser).filter(AuthUser.id == user_id).first()

    @staticmethod
    def _checked_email(email: str) -> str:
        email = (email or "").strip().lower()
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise IdentityError(f"Invalid email address: {e}") from e
        return email

    def _by_email(self, email: str) -> Optional[AuthUser]:
        return self.db.query(AuthUser).filter(func.lower(AuthUser.email) == email.strip().lower()).first()

    def create_user(self, email: str, password: str, metadata: Optional[dict] = None) -> AuthUser:
        email = self._checked_email(email)
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise IdentityError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
        if self._by_email(email):
            raise IdentityError("A user with this email address has already been registered")

        user = AuthUser(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=get_password_hash(password),
            user_metadata=metadata or {},
            email_confirmed=True,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise IdentityError("A user with this email address has already been registered") from e
        self.db.refresh(user)
        return user

    def update_user_by_id(self, user_id: str, email: Optional[str] = None, password: Optional[str] = None) -> AuthUser:
        user = self.get_user(user_id)
        if not user:
            raise IdentityError("User not found")

        if email is not None:
            email = self._checked_email(email)
            other = self._by_email(email)
            if other and other.id != user.id:
                raise IdentityError("A user with this email address has already been registered")
            user.email = email
        if password is not None:
            if len(password) < MIN_PASSWORD_LENGTH:
                raise IdentityError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
            user.password_hash = get_password_hash(password)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise IdentityError(str(e.orig)) from e
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        if not user:
            raise IdentityError("User not found")
        self.db.delete(user)
        self.db.commit()

    def sign_in(self, email: str, password: str) -> AuthUser:
        user = self._by_email(email or "")
        if not user or not verify_password(password or "", user.password_hash):
            raise IdentityError("Invalid login credentials")
        return user
