"""
Audit Log Model
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy.sql import func
from mugshop.core import Base
from .base import UUIDMixin, utcnow

class AuditLog(Base, UUIDMixin):
    """Audit Log for tracking changes"""
    __tablename__ = "audit_log"

    table_name = Column(String(100), nullable=False, index=True)
    record_id = Column(String(50), nullable=False, index=True)

    action = Column(String(20), nullable=False)  # STATUS_CHANGE, DISCOUNT, TOTAL, CHECKOUT, DELETE

    performed_by = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"))
    performed_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)

    # Before/After data
    before_data = Column(JSON)
    after_data = Column(JSON)
