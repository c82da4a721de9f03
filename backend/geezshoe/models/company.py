from sqlalchemy import Column, Integer, String, JSON
from geezshoe.database import Base

COMPANY_ID = 1

# Single settings row with shop contact details and promotional images
class CompanyInfo(Base):
    __tablename__ = "company_info"

    id = Column(Integer, primary_key=True, index=True, default=COMPANY_ID)
    email = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    instagram = Column(String, nullable=True)
    whatsapp = Column(String, nullable=True)
    telegram = Column(String, nullable=True)
    ad_img = Column(JSON, nullable=False, default=list)
