from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from catalog.exceptions import FieldCode, NotFound, ValidationError
from catalog.models.category import SubCategory
from catalog.models.discount import NO_DISCOUNT
from catalog.models.image import Image, MainImage
from catalog.models.manufacturer import Manufacturer
from catalog.models.product import Product
from catalog.repositories.product_repo import ProductRepository
from catalog.repositories.reference_repo import ReferenceRepository
from catalog.schemas.product_schema import ProductFilter, ProductOut, ProductRequest
from catalog.services.discount_service import DiscountResolver
from catalog.services.filters import build_filter
from catalog.services.pricing import apply_discount, quantize_price, recover_base_price
from catalog.services.rating_service import RatingService
from catalog.utils import validation as v
from catalog.utils.logs import get_logger
from catalog.utils.transactions import smart_transaction

log = get_logger("catalog.products")

MAX_PRICE = Decimal("99999999.99")
NOT_AVAILABLE = "N/A"


def _check_bounds(p: Product):
    """Constraint table applied to a product after an update has been merged in."""
    v.check_length(p.name, FieldCode.NOME, "Name", 5, 100)
    v.check_length(p.description, FieldCode.DESCRICAO, "Description", 5, 1024)
    v.check_length(p.color, FieldCode.COR, "Color", 2, 30)
    v.check_range(p.base_price, FieldCode.VALOR, "Price", 0, MAX_PRICE)
    v.check_length(p.model, FieldCode.MODELO, "Model", 2, 30)
    v.check_range(p.weight, FieldCode.PESO, "Weight", 0, 1000, "kg")
    v.check_range(p.height, FieldCode.ALTURA, "Height", 0, 500, "cm")
    v.check_range(p.length, FieldCode.COMPRIMENTO, "Length", 0, 500, "cm")
    v.check_range(p.width, FieldCode.LARGURA, "Width", 0, 500, "cm")
    v.check_length(p.manufacturer.name, FieldCode.FABRICANTE, "Manufacturer", 2, 50)
    v.check_length(p.sub_category.name, FieldCode.SUBCATEGORIA, "Sub-category", 2, 30)
    if v.is_blank(p.main_image.url):
        raise ValidationError(FieldCode.IMGPRINCIPAL, "The Main image field is required!")


def validate_registration(req: ProductRequest):
    v.check_text(req.name, FieldCode.NOME, "Name", 5, 100)
    v.check_text(req.description, FieldCode.DESCRICAO, "Description", 5, 1024)
    v.check_text(req.color, FieldCode.COR, "Color", 2, 30)
    v.check_number(req.price, FieldCode.VALOR, "Price", 0, MAX_PRICE)
    v.check_text(req.model, FieldCode.MODELO, "Model", 2, 30)
    v.check_number(req.weight, FieldCode.PESO, "Weight", 0, 1000, "kg")
    v.check_number(req.height, FieldCode.ALTURA, "Height", 0, 500, "cm")
    v.check_number(req.length, FieldCode.COMPRIMENTO, "Length", 0, 500, "cm")
    v.check_number(req.width, FieldCode.LARGURA, "Width", 0, 500, "cm")
    v.check_text(req.manufacturer, FieldCode.FABRICANTE, "Manufacturer", 2, 50)
    if v.is_blank(req.supplier):
        raise ValidationError(FieldCode.FORNECEDOR, "The Supplier field is required!")
    v.check_text(req.sub_category, FieldCode.SUBCATEGORIA, "Sub-category", 2, 30)
    if v.is_blank(req.main_image):
        raise ValidationError(FieldCode.IMGPRINCIPAL, "The Main image field is required!")
    v.check_list(req.images, FieldCode.IMAGENS, "Images")


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.refs = ReferenceRepository(db)
        self.discounts = DiscountResolver(db)
        self.ratings = RatingService(db)

    # ---- lookups -------------------------------------------------------

    def _get_product(self, product_id: str) -> Product:
        try:
            UUID(str(product_id))
        except ValueError:
            raise NotFound("Product not found")
        p = self.products.get_by_id(str(product_id))
        if not p:
            raise NotFound("Product not found")
        return p

    def _get_manufacturer(self, name: str) -> Manufacturer:
        # manufacturers are created on first use, unlike sub-categories
        m = self.refs.get_manufacturer(name)
        if m is None:
            m = self.refs.create_manufacturer(name)
            log.info(f"manufacturer created name={name!r}")
        return m

    def _get_sub_category(self, name: str) -> SubCategory:
        sc = self.refs.get_sub_category(name)
        if sc is None:
            raise ValidationError(FieldCode.SUBCATEGORIA, "Sub-category does not exist!")
        return sc

    def _supplier_name(self, p: Product) -> str:
        link = self.refs.get_supplier_link(p)
        return link.supplier.name if link else NOT_AVAILABLE

    # ---- assembly ------------------------------------------------------

    def _to_view(self, p: Product) -> ProductOut:
        """Build the computed view. Writes the recomputed average onto the row."""
        average = self.ratings.recompute_and_persist_average(p)
        return ProductOut(
            id=p.id,
            name=p.name,
            description=p.description,
            color=p.color,
            price=quantize_price(p.price),
            original_price=quantize_price(p.base_price),
            model=p.model,
            weight=p.weight,
            height=p.height,
            length=p.length,
            width=p.width,
            manufacturer=p.manufacturer.name,
            supplier=self._supplier_name(p),
            category=p.sub_category.category.name,
            sub_category=p.sub_category.name,
            main_image=p.main_image.url,
            images=[img.url for img in p.main_image.images],
            discount=p.discount.value,
            average_rating=average,
            rating_count=self.ratings.count(p),
        )

    def get_by_id(self, product_id: str) -> ProductOut:
        with smart_transaction(self.db):
            return self._to_view(self._get_product(product_id))

    def search(self, filtro: ProductFilter) -> List[ProductOut]:
        plan = build_filter(filtro)
        with smart_transaction(self.db):
            items = self.products.find_all(plan.criteria, page=plan.page, size=plan.size)
            return [self._to_view(p) for p in items]

    def list_discounted(self) -> List[ProductOut]:
        with smart_transaction(self.db):
            return [self._to_view(p) for p in self.products.find_discounted()]

    # ---- mutations -----------------------------------------------------

    def register(self, req: ProductRequest) -> Product:
        """
        Validate and persist a new product together with its images and its
        supplier link. Nothing is written if any lookup fails.
        """
        validate_registration(req)
        with smart_transaction(self.db):
            discount = self.discounts.resolve(req.discount)
            manufacturer = self._get_manufacturer(req.manufacturer)
            sub_category = self._get_sub_category(req.sub_category)
            supplier = self.refs.get_supplier(req.supplier)
            if supplier is None:
                raise NotFound("Supplier not found")

            main_image = MainImage(url=req.main_image)
            main_image.images = [Image(url=url) for url in v.check_list(req.images, FieldCode.IMAGENS, "Images")]

            base_price = quantize_price(req.price)
            p = Product(
                name=req.name,
                description=req.description,
                color=req.color,
                base_price=base_price,
                price=apply_discount(base_price, discount.value),
                model=req.model,
                weight=req.weight,
                height=req.height,
                length=req.length,
                width=req.width,
                manufacturer=manufacturer,
                sub_category=sub_category,
                main_image=main_image,
                discount=discount,
            )
            self.products.add(p)
            self.refs.link_supplier(supplier, p)
        log.info(f"product registered id={p.id} price={p.price} discount={discount.value}")
        return p

    def update(self, product_id: str, req: ProductRequest) -> Product:
        """
        Partial update: absent or blank fields keep their current value.

        A submitted price is read as the price the customer currently pays
        under the product's existing discount. The undiscounted base price is
        recovered from it and the (possibly new) discount applied on top.
        """
        with smart_transaction(self.db):
            p = self._get_product(product_id)
            old_discount = p.discount

            if not v.is_blank(req.manufacturer):
                p.manufacturer = self._get_manufacturer(req.manufacturer)
            if not v.is_blank(req.sub_category):
                p.sub_category = self._get_sub_category(req.sub_category)
            discount = old_discount if v.is_blank(req.discount) else self.discounts.resolve(req.discount)

            if req.price is not None:
                current = v.check_range(req.price, FieldCode.VALOR, "Price", 0, MAX_PRICE)
                p.base_price = recover_base_price(current, old_discount.value)
            p.discount = discount
            p.price = apply_discount(p.base_price, discount.value)

            for attr in ("name", "description", "color", "model"):
                value = getattr(req, attr)
                if not v.is_blank(value):
                    setattr(p, attr, value)
            for attr in ("weight", "height", "length", "width"):
                value = getattr(req, attr)
                if value is not None:
                    setattr(p, attr, value)
            if not v.is_blank(req.main_image):
                p.main_image.url = req.main_image
            if req.images is not None:
                p.main_image.images = [Image(url=url) for url in v.check_list(req.images, FieldCode.IMAGENS, "Images")]

            _check_bounds(p)
            self.db.flush()
        log.info(f"product updated id={p.id} base_price={p.base_price} price={p.price}")
        return p

    def delete(self, product_id: str):
        with smart_transaction(self.db):
            p = self._get_product(product_id)
            link = self.refs.get_supplier_link(p)
            if link is None:
                raise NotFound("Supplier link not found")
            self.refs.unlink_supplier(link)
            self.products.delete(p)
        log.info(f"product deleted id={product_id}")

    def remove_discount(self, product_id: str) -> Product:
        with smart_transaction(self.db):
            p = self._get_product(product_id)
            p.discount = self.discounts.resolve(NO_DISCOUNT)
            p.price = p.base_price
            self.db.flush()
        log.info(f"discount removed id={p.id} price={p.price}")
        return p

    def rate(self, product_id: str, value) -> Decimal:
        """Store a rating and return the product's new average."""
        with smart_transaction(self.db):
            p = self._get_product(product_id)
            self.ratings.submit(p, value)
            return self.ratings.recompute_and_persist_average(p)
