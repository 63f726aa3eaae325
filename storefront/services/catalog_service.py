"""
Catalog queries: categories, subcategories and products
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError
from storefront.models import Category, Subcategory, Product
from storefront.schemas import CategoryCreate, SubcategoryCreate, ProductCreate


class CatalogService:
    FEATURED_LIMIT = 6

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name.asc()).all()

    def get_category(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def create_category(self, data: CategoryCreate) -> Category:
        category = Category(**data.model_dump())
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        logger.info(f"Category created: {category}")
        return category

    def list_subcategories(self, category_id: Optional[int] = None) -> List[Subcategory]:
        query = self.db.query(Subcategory)
        if category_id is not None:
            query = query.filter(Subcategory.category_id == category_id)
        return query.order_by(Subcategory.name.asc()).all()

    def create_subcategory(self, data: SubcategoryCreate) -> Subcategory:
        self.get_category(data.category_id)
        subcategory = Subcategory(**data.model_dump())
        self.db.add(subcategory)
        self.db.commit()
        self.db.refresh(subcategory)
        logger.info(f"Subcategory created: {subcategory}")
        return subcategory

    def list_products(
        self,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        featured: Optional[bool] = None,
        is_deal: Optional[bool] = None,
    ) -> List[Product]:
        """Products matching every supplied filter, newest first"""
        query = self.db.query(Product)

        if search:
            query = query.filter(Product.name.ilike(f"%{search}%"))
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if subcategory_id is not None:
            query = query.filter(Product.subcategory_id == subcategory_id)
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)
        if featured is not None:
            query = query.filter(Product.featured == featured)
        if is_deal is not None:
            query = query.filter(Product.is_deal == is_deal)

        return query.order_by(Product.created_at.desc(), Product.id.desc()).all()

    def featured_products(self) -> List[Product]:
        return (
            self.db.query(Product)
            .filter(Product.featured.is_(True))
            .order_by(Product.created_at.desc(), Product.id.desc())
            .limit(self.FEATURED_LIMIT)
            .all()
        )

    def deal_products(self, now: Optional[datetime] = None) -> List[Product]:
        """Deals whose expiry is still ahead of now"""
        now = now or datetime.now(timezone.utc)
        return (
            self.db.query(Product)
            .filter(Product.is_deal.is_(True), Product.deal_expiry > now)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .all()
        )

    def get_product(self, product_id: int) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def create_product(self, data: ProductCreate) -> Product:
        if data.category_id is not None:
            self.get_category(data.category_id)
        if data.subcategory_id is not None:
            subcategory = self.db.get(Subcategory, data.subcategory_id)
            if subcategory is None:
                raise NotFoundError("Subcategory not found")

        product = Product(**data.model_dump())
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        logger.info(f"Product created: {product}")
        return product
