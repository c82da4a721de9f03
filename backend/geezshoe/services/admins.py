# backend/geezshoe/services/admins.py
"""
Admin account management.

Every operation first checks, server-side, that the requester is the main
admin. Only "normal" admins can be edited or deleted, so the main account is
never reachable through these paths.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from geezshoe.errors import AdminOperationError, AuthorizationError, IdentityError
from geezshoe.models.admin import Admin, ROLE_NORMAL
from geezshoe.repositories import AdminRepository
from geezshoe.utils.guards import require_role
from geezshoe.utils.identity import IdentityService, MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)


def _require_main(db: Session, requester_id: str, message: str) -> None:
    try:
        require_role(db, requester_id)
    except AuthorizationError:
        raise AdminOperationError(message, status_code=403)


def create_admin(db: Session, requester_id: str, name: Optional[str], email: Optional[str], password: Optional[str]) -> Admin:
    _require_main(db, requester_id, "Only main admins can create admins")

    if not (name or "").strip() or not (email or "").strip() or not password:
        raise AdminOperationError("Missing required fields: name, email, password", status_code=400)

    identity = IdentityService(db)
    try:
        user = identity.create_user(email.strip(), password, {"full_name": name.strip(), "role": ROLE_NORMAL})
    except IdentityError as e:
        raise AdminOperationError(str(e), status_code=400)

    try:
        return AdminRepository(db).add(Admin(id=user.id, name=name.strip(), email=email.strip(), role=ROLE_NORMAL))
    except SQLAlchemyError as e:
        db.rollback()
        # No orphaned login without an admin record
        try:
            identity.delete_user(user.id)
        except (IdentityError, SQLAlchemyError) as cleanup_error:
            logger.warning("Could not remove identity %s after failed admin insert: %s", user.id, cleanup_error)
        raise AdminOperationError(str(e.orig) if getattr(e, "orig", None) else "Failed to add admin record", status_code=400)


def edit_admin(db: Session, requester_id: str, admin_id: str,
               name: Optional[str] = None, email: Optional[str] = None) -> Admin:
    _require_main(db, requester_id, "Unauthorized")

    updates = {}
    if isinstance(name, str):
        updates["name"] = name.strip()
    if isinstance(email, str):
        updates["email"] = email.strip()
    if not updates:
        raise AdminOperationError("No valid fields to update", status_code=400)
    blank = [field for field, value in updates.items() if not value]
    if blank:
        raise AdminOperationError(f"Fields cannot be empty: {', '.join(blank)}", status_code=400)

    repo = AdminRepository(db)
    target = repo.get_normal(admin_id)
    if not target:
        raise AdminOperationError("Admin not found or cannot be edited", status_code=404)
    previous_email = target.email

    admin = repo.update_normal(admin_id, **updates)

    if "email" in updates:
        try:
            IdentityService(db).update_user_by_id(admin_id, email=updates["email"])
        except IdentityError as e:
            # Keep the admin record in line with the sign-in identity
            repo.update_normal(admin_id, email=previous_email)
            raise AdminOperationError(f"Failed to update auth email: {e}", status_code=400)

    return admin


def reset_password(db: Session, requester_id: str, admin_id: str, new_password: Optional[str]) -> None:
    _require_main(db, requester_id, "Unauthorized")

    if not isinstance(new_password, str) or len(new_password) < MIN_PASSWORD_LENGTH:
        raise AdminOperationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters", status_code=400)

    try:
        IdentityService(db).update_user_by_id(admin_id, password=new_password)
    except IdentityError as e:
        raise AdminOperationError(str(e), status_code=400)


def list_admins(db: Session, requester_id: str) -> List[Admin]:
    _require_main(db, requester_id, "Only main admins can list admins")
    return AdminRepository(db).list_normal()


def delete_admin(db: Session, requester_id: str, admin_id: str) -> None:
    _require_main(db, requester_id, "Unauthorized")

    repo = AdminRepository(db)
    target = repo.get_normal(admin_id)
    if not target:
        raise AdminOperationError("Admin not found or cannot be deleted", status_code=404)

    repo.delete(target)

    # Best effort, the admin record is already gone
    try:
        IdentityService(db).delete_user(admin_id)
    except (IdentityError, SQLAlchemyError) as e:
        logger.warning("Auth user delete failed, admin record removed: %s", e)
