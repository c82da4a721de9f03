from sqlalchemy import Column, String, Boolean, DateTime, JSON, func
from geezshoe.database import Base

ROLE_MAIN = "main"
ROLE_NORMAL = "normal"

# Sign-in identity (email + password hash), owned by the identity service
class AuthUser(Base):
    __tablename__ = "auth_users"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    user_metadata = Column(JSON, nullable=False, default=dict) # full_name, role
    email_confirmed = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


# Application-level admin record; id is the AuthUser id
class Admin(Base):
    __tablename__ = "admins"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False, default=ROLE_NORMAL, index=True)
