# backend/geezshoe/routes/admin.py
from fastapi import APIRouter, Depends, Query, Request
from typing import Optional
from sqlalchemy.orm import Session
import logging

from geezshoe.database import get_db
from geezshoe.errors import AdminOperationError
from geezshoe.schemas.admin import (
    AdminCreateBody, AdminEditBody, AdminResetPasswordBody, AdminResult, AdminList, AdminOut
)
from geezshoe.services import admins as admin_service
from geezshoe.utils.audit import write_log

router = APIRouter(prefix="/api/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

# Management of back-office accounts. The caller names itself with requesterId
# and its role is looked up again on every call; only the main admin passes.


def _required(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def _audit(db: Session, request: Request, requester_id: str, action: str, meta: dict):
    write_log(db, user_id=requester_id, action=action, resource="admins", status="SUCCESS",
              ip=request.client.host if request.client else None, meta=meta)


# Create a normal admin (identity + admin record)
@router.post("/create", response_model=AdminResult)
def create_admin(payload: AdminCreateBody, request: Request, db: Session = Depends(get_db)):
    requester_id = _required(payload.requesterId)
    if not requester_id:
        raise AdminOperationError("Missing required fields: name, email, password, requesterId", status_code=400)

    admin = admin_service.create_admin(db, requester_id, payload.name, payload.email, payload.password)
    _audit(db, request, requester_id, "ADMIN_CREATE", {"id": admin.id})
    return {"success": True, "admin": AdminOut.model_validate(admin)}


# Update name and/or email of a normal admin
@router.put("/edit", response_model=AdminResult)
def edit_admin(payload: AdminEditBody, request: Request, db: Session = Depends(get_db)):
    requester_id = _required(payload.requesterId)
    admin_id = _required(payload.id)
    if not admin_id or not requester_id:
        raise AdminOperationError("Missing required fields: id, requesterId", status_code=400)

    admin = admin_service.edit_admin(db, requester_id, admin_id, name=payload.name, email=payload.email)
    _audit(db, request, requester_id, "ADMIN_EDIT", {"id": admin_id})
    return {"success": True, "admin": AdminOut.model_validate(admin)}


# Set a new password on an admin's sign-in identity
@router.put("/reset-password", response_model=AdminResult, response_model_exclude_none=True)
def reset_password(payload: AdminResetPasswordBody, request: Request, db: Session = Depends(get_db)):
    requester_id = _required(payload.requesterId)
    admin_id = _required(payload.id)
    if not admin_id or not payload.newPassword or not requester_id:
        raise AdminOperationError("Missing required fields: id, newPassword, requesterId", status_code=400)

    admin_service.reset_password(db, requester_id, admin_id, payload.newPassword)
    _audit(db, request, requester_id, "ADMIN_RESET_PASSWORD", {"id": admin_id})
    return {"success": True}


# List normal admins by name
@router.get("/list", response_model=AdminList)
def list_admins(requesterId: Optional[str] = Query(None), db: Session = Depends(get_db)):
    requester_id = _required(requesterId)
    if not requester_id:
        raise AdminOperationError("Missing required query param: requesterId", status_code=400)

    return {"admins": admin_service.list_admins(db, requester_id)}


# Delete a normal admin; the sign-in identity is removed best effort
@router.delete("/delete", response_model=AdminResult, response_model_exclude_none=True)
def delete_admin(
    request: Request,
    id: Optional[str] = Query(None),
    requesterId: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    requester_id = _required(requesterId)
    admin_id = _required(id)
    if not admin_id or not requester_id:
        raise AdminOperationError("Missing required query params: id, requesterId", status_code=400)

    admin_service.delete_admin(db, requester_id, admin_id)
    _audit(db, request, requester_id, "ADMIN_DELETE", {"id": admin_id})
    return {"success": True}
