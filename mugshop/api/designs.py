"""
Designs API - artwork uploads attached to orders
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from mugshop.core import get_db
from mugshop.integrations import BaseStorageClient, get_storage_client
from mugshop.models import AppUser
from mugshop.schemas.order import DesignUploadResponse
from mugshop.services import DesignService
from .auth import get_current_active_user

router = APIRouter(tags=["Designs"])


@router.post("/orders/{order_id}/designs", response_model=DesignUploadResponse)
async def upload_design(
    order_id: UUID,
    file: UploadFile = File(...),
    file_name: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    storage: BaseStorageClient = Depends(get_storage_client),
    current_user: AppUser = Depends(get_current_active_user)
):
    data = await file.read()
    DesignService.validate_upload(data, file.content_type)

    return await DesignService.upload(
        db, storage, order_id,
        file_name=file_name or file.filename or "design",
        data=data,
        mime_type=file.content_type
    )


@router.get("/orders/{order_id}/designs", response_model=List[DesignUploadResponse])
def list_designs(order_id: UUID, db: Session = Depends(get_db)):
    return DesignService.get_designs(db, order_id)


@router.delete("/designs/{design_id}")
def remove_design(
    design_id: UUID,
    db: Session = Depends(get_db),
    current_user: AppUser = Depends(get_current_active_user)
):
    DesignService.remove_design(db, design_id)
    return {"success": True}
