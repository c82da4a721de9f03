# backend/geezshoe/seed.py
"""Creates the tables, the main admin account and the empty company-info row.

Run with ``python -m geezshoe.seed``. Safe to run more than once.
"""
import logging

from sqlalchemy.orm import Session

from geezshoe.config import settings
from geezshoe.database import SessionLocal, init_db
from geezshoe.models.admin import Admin, AuthUser, ROLE_MAIN
from geezshoe.models.company import CompanyInfo, COMPANY_ID
from geezshoe.utils.identity import IdentityService

logger = logging.getLogger(__name__)


def ensure_main_admin(db: Session, name: str, email: str, password: str) -> Admin:
    existing = db.query(Admin).filter(Admin.role == ROLE_MAIN).first()
    if existing:
        logger.info("Main admin already present: %s", existing.email)
        return existing

    identity = IdentityService(db)
    user = db.query(AuthUser).filter(AuthUser.email == email.strip().lower()).first()
    if not user:
        user = identity.create_user(email, password, {"full_name": name, "role": ROLE_MAIN})

    admin = Admin(id=user.id, name=name, email=email.strip(), role=ROLE_MAIN)
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Created main admin %s", admin.email)
    return admin


def ensure_company_info(db: Session) -> CompanyInfo:
    info = db.query(CompanyInfo).filter(CompanyInfo.id == COMPANY_ID).first()
    if not info:
        info = CompanyInfo(id=COMPANY_ID, ad_img=[])
        db.add(info)
        db.commit()
        db.refresh(info)
    return info


def seed(db: Session) -> None:
    ensure_main_admin(db, settings.MAIN_ADMIN_NAME, settings.MAIN_ADMIN_EMAIL, settings.MAIN_ADMIN_PASSWORD)
    ensure_company_info(db)


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()
    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()


if __name__ == "__main__":
    main()
