from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import String, Text, DateTime, Enum, ForeignKey
from typing import Optional
import datetime
import enum

class Base(DeclarativeBase):
    pass

class ProductType(str, enum.Enum):
    AIR_FILTER = "AIR_FILTER"
    OIL_FILTER = "OIL_FILTER"
    AIR_OIL_SEPARATOR = "AIR_OIL_SEPARATOR"

def utcnow() -> datetime.datetime:
    # Naive UTC, matching the timezone-less DateTime columns
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)

class Product(Base):
    __tablename__ = "products"
    id: Mapped[int] = mapped_column(primary_key=True)
    # Stored trimmed and uppercased
    part_number: Mapped[str] = mapped_column(String, unique=True, index=True)
    product_type: Mapped[ProductType] = mapped_column(Enum(ProductType, native_enum=False, length=32))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow)
    batches: Mapped[list["ProductionBatch"]] = relationship("ProductionBatch", back_populates="product")

class ProductionBatch(Base):
    __tablename__ = "production_batches"
    id: Mapped[int] = mapped_column(primary_key=True)
    # Free-form; PARTNUMBER-YYYYMMDD-SEQ is conventional but not enforced
    batch_code: Mapped[str] = mapped_column(String, unique=True, index=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))
    quantity: Mapped[int]
    produced_by: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    production_line: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    remarks: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime, default=utcnow, index=True)
    # Reserved for edit support; never written on create
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime, nullable=True)
    product: Mapped[Product] = relationship("Product", back_populates="batches")
