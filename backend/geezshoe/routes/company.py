# backend/geezshoe/routes/company.py
from fastapi import APIRouter, Depends, HTTPException, Request, UploadFile, File
from sqlalchemy.orm import Session
import logging

from geezshoe.database import get_db
from geezshoe.models.admin import Admin
from geezshoe.models.company import COMPANY_ID
from geezshoe.repositories import CompanyInfoRepository
from geezshoe.schemas.company import CompanyInfoOut, CompanyInfoUpdate
from geezshoe.schemas.product import ImageUploadOut
from geezshoe.utils.audit import write_log
from geezshoe.utils.storage import ObjectStorage, get_storage, COMPANY_BUCKET, ALLOWED_IMAGE_TYPES, unique_name
from geezshoe.utils.tokenJWT import get_current_admin

router = APIRouter(prefix="/company-info", tags=["Company"])
logger = logging.getLogger(__name__)

# Company contact details and promotional images shown on the storefront

# Retrieve company details
@router.get("", response_model=CompanyInfoOut)
def get_company(db: Session = Depends(get_db)):
    info = CompanyInfoRepository(db).get()
    if not info:
        # Nothing saved yet
        return CompanyInfoOut(id=COMPANY_ID)
    return info


# Create or replace company details (admin)
@router.put("", response_model=CompanyInfoOut)
def update_company(
    payload: CompanyInfoUpdate,
    request: Request,
    db: Session = Depends(get_db),
    storage: ObjectStorage = Depends(get_storage),
    current_admin: Admin = Depends(get_current_admin),
):
    repo = CompanyInfoRepository(db)
    previous = repo.get()
    dropped = [url for url in (previous.ad_img or [])] if previous else []

    info = repo.upsert(**payload.model_dump())

    # Ad images that were swapped out are no longer referenced anywhere
    storage.remove_public_urls(COMPANY_BUCKET, [url for url in dropped if url not in info.ad_img])

    write_log(
        db,
        user_id=current_admin.id,
        action="COMPANY_UPDATE",
        resource="company",
        status="SUCCESS",
        ip=request.client.host if request.client else None,
        meta={"company_id": info.id}
    )
    return info


# Upload a promotional image (admin)
@router.post("/images", response_model=ImageUploadOut)
def upload_company_image(
    file: UploadFile = File(...),
    storage: ObjectStorage = Depends(get_storage),
    current_admin: Admin = Depends(get_current_admin),
):
    ext = ALLOWED_IMAGE_TYPES.get(file.content_type)
    if not ext:
        raise HTTPException(status_code=400, detail="Invalid file type")

    path = f"ads/{unique_name(ext)}"
    try:
        storage.upload(COMPANY_BUCKET, path, file.file.read())
    except OSError as e:
        logger.error("Company ad upload failed: %s", e)
        raise HTTPException(status_code=500, detail=f"File save error: {e}")
    finally:
        file.file.close()

    return {"url": storage.get_public_url(COMPANY_BUCKET, path), "path": path}
