# backend/geezshoe/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from geezshoe.database import get_db
from geezshoe.errors import IdentityError
from geezshoe.models.admin import Admin
from geezshoe.repositories import AdminRepository
from geezshoe.schemas.admin import AdminOut
from geezshoe.schemas.user import AdminLogin, Token
from geezshoe.utils.audit import write_log
from geezshoe.utils.identity import IdentityService
from geezshoe.utils.tokenJWT import create_access_token, get_current_admin

router = APIRouter(prefix="/auth", tags=["Auth"])


# Authenticate an admin and issue a JWT token
@router.post("/login", response_model=Token)
def login(payload: AdminLogin, request: Request, db: Session = Depends(get_db)):
    ip = request.client.host if request.client else None
    try:
        user = IdentityService(db).sign_in(payload.email, payload.password)
    except IdentityError:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL", ip=ip, meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    # A sign-in identity without an admin record has no access to the back office
    admin = AdminRepository(db).get(user.id)
    if not admin:
        write_log(db, user_id=user.id, action="LOGIN", resource="auth", status="FAIL", ip=ip, meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not an admin account")

    access_token = create_access_token(data={"sub": admin.id, "role": admin.role})
    write_log(db, user_id=admin.id, action="LOGIN", resource="auth", status="SUCCESS", ip=ip, meta={"email": admin.email})
    return {"access_token": access_token, "token_type": "bearer"}


# Retrieve the signed-in admin
@router.get("/me", response_model=AdminOut)
def me(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
