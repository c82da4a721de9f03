from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

MAX_AD_IMAGES = 2


# Schema for displaying company details
class CompanyInfoOut(BaseModel):
    id: int
    email: Optional[str] = None
    phone_number: Optional[str] = None
    instagram: Optional[str] = None
    whatsapp: Optional[str] = None
    telegram: Optional[str] = None
    ad_img: List[str] = []

    model_config = ConfigDict(from_attributes=True)


# Schema for saving company information
class CompanyInfoUpdate(BaseModel):
    email: str = Field(min_length=1)
    phone_number: str = Field(min_length=1)
    instagram: Optional[str] = None
    whatsapp: Optional[str] = None
    telegram: Optional[str] = None
    ad_img: List[str] = Field(min_length=1, max_length=MAX_AD_IMAGES)

    @field_validator("email", "phone_number")
    @classmethod
    def _required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field is required")
        return v

    @field_validator("instagram", "whatsapp", "telegram")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return (v or "").strip() or None
