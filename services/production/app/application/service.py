from datetime import date
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from shared.core import get_logger
from app.domain.models import Product, ProductionBatch, ProductType
from app.domain.batch_code import generate_batch_code, parse_batch_code
from .errors import ConflictError, NotFoundError, ValidationFailed
from .presentation import batch_matches, product_matches
from .schemas import BatchCreate, ProductCreate
from .validation import FieldError, coerce_int, validate_batch, validate_product

logger = get_logger(__name__)

def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value if value else None

class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, search: Optional[str] = None):
        products = self.db.query(Product).order_by(Product.id).all()
        if search:
            products = [p for p in products if product_matches(p, search)]
        return products

    def get(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create(self, data: ProductCreate) -> Product:
        values = data.model_dump()
        if isinstance(values["part_number"], str):
            values["part_number"] = values["part_number"].strip().upper()

        result = validate_product(values)
        if not result.is_valid:
            raise ValidationFailed(result.errors)

        obj = Product(
            part_number=values["part_number"],
            product_type=ProductType(values["product_type"]),
            description=_blank_to_none(values["description"]),
        )
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError:
            # part_number is the only unique column besides the key
            self.db.rollback()
            logger.warning(f"Duplicate part number {values['part_number']}")
            raise ConflictError("Part number already exists")

        self.db.refresh(obj)
        logger.info(
            f"Product created: {obj.part_number}",
            extra={'extra_fields': {'product_id': obj.id, 'product_type': obj.product_type.value}}
        )
        return obj

class BatchService:
    def __init__(self, db: Session):
        self.db = db

    def list(self, search: Optional[str] = None) -> list[dict]:
        """All batches with their product fields, newest first."""
        rows = (
            self.db.query(ProductionBatch, Product.part_number, Product.product_type, Product.description)
            .outerjoin(Product, ProductionBatch.product_id == Product.id)
            .order_by(ProductionBatch.created_at.desc(), ProductionBatch.id.desc())
            .all()
        )
        batches = [
            self._with_product(batch, part_number, product_type, description)
            for batch, part_number, product_type, description in rows
        ]
        if search:
            batches = [b for b in batches if batch_matches(b, search)]
        return batches

    @staticmethod
    def _with_product(batch: ProductionBatch, part_number, product_type, description) -> dict:
        return {
            "id": batch.id,
            "batch_code": batch.batch_code,
            "product_id": batch.product_id,
            "quantity": batch.quantity,
            "produced_by": batch.produced_by,
            "production_line": batch.production_line,
            "remarks": batch.remarks,
            "created_at": batch.created_at,
            "updated_at": batch.updated_at,
            "part_number": part_number,
            "product_type": product_type,
            "description": description,
        }

    def get(self, batch_id: int) -> ProductionBatch:
        batch = self.db.get(ProductionBatch, batch_id)
        if batch is None:
            raise NotFoundError("Batch not found")
        return batch

    def create(self, data: BatchCreate) -> ProductionBatch:
        values = data.model_dump()
        if isinstance(values["batch_code"], str):
            values["batch_code"] = values["batch_code"].strip()

        errors = []
        if not values["batch_code"]:
            errors.append(FieldError("batch_code", "Batch code is required"))
        errors.extend(validate_batch(values).errors)
        if errors:
            raise ValidationFailed(errors)

        product_id = coerce_int(values["product_id"])
        if self.db.get(Product, product_id) is None:
            logger.warning(f"Batch {values['batch_code']} references missing product {product_id}")
            raise NotFoundError("Product not found")

        obj = ProductionBatch(
            batch_code=values["batch_code"],
            product_id=product_id,
            quantity=coerce_int(values["quantity"]),
            produced_by=_blank_to_none(values["produced_by"]),
            production_line=_blank_to_none(values["production_line"]),
            remarks=_blank_to_none(values["remarks"]),
        )
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # The product may have vanished between the lookup and the insert
            if self.db.get(Product, product_id) is None:
                raise NotFoundError("Product not found")
            logger.warning(f"Duplicate batch code {values['batch_code']}")
            raise ConflictError("Batch code already exists")

        self.db.refresh(obj)
        logger.info(
            f"Batch created: {obj.batch_code}",
            extra={'extra_fields': {'batch_id': obj.id, 'product_id': product_id, 'quantity': obj.quantity}}
        )
        return obj

    def next_batch_code(self, product_id: int, today: Optional[date] = None) -> str:
        """Suggest the next PARTNUMBER-YYYYMMDD-SEQ code for today; creation does not require it."""
        product = ProductService(self.db).get(product_id)
        today = today or date.today()
        prefix = generate_batch_code(product.part_number, today=today).rsplit("-", 1)[0] + "-"

        codes = (
            self.db.query(ProductionBatch.batch_code)
            .filter(ProductionBatch.batch_code.startswith(prefix, autoescape=True))
            .all()
        )
        last_sequence = 0
        for (code,) in codes:
            parsed = parse_batch_code(code)
            if parsed and parsed.part_number == product.part_number and parsed.date == today:
                last_sequence = max(last_sequence, parsed.sequence)

        return generate_batch_code(product.part_number, last_sequence, today=today)
