from pydantic import BaseModel, ConfigDict
from typing import List, Optional


# Output schema for admin accounts
class AdminOut(BaseModel):
    id: str
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


# Request bodies of the admin-management API. Fields are optional so that
# missing ones are reported as {"error": ...} rather than a validation list.
class AdminCreateBody(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    requesterId: Optional[str] = None


class AdminEditBody(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    requesterId: Optional[str] = None


class AdminResetPasswordBody(BaseModel):
    id: Optional[str] = None
    newPassword: Optional[str] = None
    requesterId: Optional[str] = None


class AdminResult(BaseModel):
    success: bool = True
    admin: Optional[AdminOut] = None


class AdminList(BaseModel):
    admins: List[AdminOut]
