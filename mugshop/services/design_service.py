"""
Design Service - customer artwork uploaded for an order
"""
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID, uuid4
import logging

from mugshop.core import settings
from mugshop.core.exceptions import NotFoundError, ValidationFailedError
from mugshop.integrations import BaseStorageClient
from mugshop.models import DesignUpload
from .order_service import OrderService

logger = logging.getLogger(__name__)

class DesignService:

    @staticmethod
    def validate_upload(data: bytes, mime_type: Optional[str]) -> None:
        """Size and type limits for artwork files"""
        if not data:
            raise ValidationFailedError("Uploaded file is empty")
        if len(data) > settings.MAX_UPLOAD_BYTES:
            raise ValidationFailedError(
                f"File is {len(data)} bytes, the limit is {settings.MAX_UPLOAD_BYTES} bytes"
            )
        if mime_type not in settings.ALLOWED_UPLOAD_TYPES:
            raise ValidationFailedError(
                f"Unsupported file type {mime_type}, allowed: {', '.join(settings.ALLOWED_UPLOAD_TYPES)}"
            )

    @staticmethod
    async def upload(
        db: Session,
        storage: BaseStorageClient,
        order_id: UUID,
        file_name: str,
        data: bytes,
        mime_type: Optional[str] = None
    ) -> DesignUpload:
        """Store the file and record it against the order"""
        order = OrderService.get_order_by_id(db, order_id)

        design_id = uuid4()
        safe_name = file_name.replace("\\", "/").rsplit("/", 1)[-1].strip()
        if safe_name in ("", ".", ".."):
            raise ValidationFailedError(f"Invalid file name: {file_name!r}")
        key = f"designs/{order.id}/{design_id}/{safe_name}"

        url = await storage.put(key, data, mime_type)

        design = DesignUpload(
            id=design_id,
            order_id=order.id,
            file_name=file_name,
            file_url=url,
            file_size=len(data),
            mime_type=mime_type
        )
        db.add(design)
        try:
            db.commit()
        except Exception:
            db.rollback()
            # The object is already in storage with no row pointing at it
            logger.error(f"Design record for order {order_id} not saved, orphaned storage key {key}")
            raise
        db.refresh(design)

        logger.info(f"Design {file_name} ({len(data)} bytes) uploaded for {order.order_number}")
        return design

    @staticmethod
    def get_designs(db: Session, order_id: UUID) -> List[DesignUpload]:
        return db.query(DesignUpload).filter(DesignUpload.order_id == order_id).order_by(DesignUpload.uploaded_at).all()

    @staticmethod
    def remove_design(db: Session, design_id: UUID) -> bool:
        design = db.query(DesignUpload).filter(DesignUpload.id == design_id).first()
        if not design:
            raise NotFoundError("Design", design_id)

        db.delete(design)
        db.commit()
        return True
