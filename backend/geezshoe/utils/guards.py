from sqlalchemy.orm import Session

from geezshoe.errors import AuthorizationError
from geezshoe.models.admin import ROLE_MAIN
from geezshoe.repositories import AdminRepository


def require_role(db: Session, requester_id: str, role: str = ROLE_MAIN) -> None:
    """Looks up the requester's role server-side and rejects unless it is exactly `role`."""
    actual = AdminRepository(db).get_role((requester_id or "").strip())
    if actual != role:
        raise AuthorizationError(f"Requester is not a {role} admin")
