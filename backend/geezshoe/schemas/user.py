from pydantic import BaseModel, EmailStr


# Schema for admin sign-in credentials
class AdminLogin(BaseModel):
    email: EmailStr
    password: str


# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
