from sqlalchemy import Column, Integer, String, DateTime, JSON, Index, UniqueConstraint
from sqlalchemy.sql import func
from centymo.config.database import Base

class TimestampMixin:
    """Mixin para timestamps automáticos"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

# ===== DOCUMENTOS GENÉRICOS =====

class RecordDocument(Base, TimestampMixin):
    """
    Registro genérico de una colección (inventory_item, revenue, product...).

    Los campos del registro viajan como documento JSON; la capa de vistas
    no impone esquema sobre ellos. ``seq`` conserva el orden de inserción.
    """
    __tablename__ = "records"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    collection = Column(String(100), nullable=False)
    id = Column(String(64), nullable=False)
    data = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        UniqueConstraint("collection", "id", name="uq_records_collection_id"),
        Index("ix_records_collection", "collection"),
    )

    def to_record(self):
        record = dict(self.data or {})
        record["id"] = self.id
        return record
