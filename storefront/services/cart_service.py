"""
Persisted cart and wishlist for signed-in shoppers
"""
from typing import Any, Dict, Iterable, List, Tuple

from loguru import logger
from sqlalchemy.orm import Session

from storefront.exceptions import NotFoundError, ValidationError
from storefront.models import CartItem, WishlistItem
from storefront.services.catalog_service import CatalogService


class CartService:
    """
    Cart rows are unique per (user, product); adding a product that is
    already in the cart increases its quantity.
    """

    def __init__(self, db: Session, catalog: CatalogService = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)

    def list_items(self, user_id: int) -> List[CartItem]:
        return (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id)
            .order_by(CartItem.created_at.desc(), CartItem.id.desc())
            .all()
        )

    def _find(self, user_id: int, product_id: int):
        return (
            self.db.query(CartItem)
            .filter(CartItem.user_id == user_id, CartItem.product_id == product_id)
            .first()
        )

    def _stage_add(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        self.catalog.get_product(product_id)

        item = self._find(user_id, product_id)
        if item:
            item.quantity = (item.quantity or 0) + quantity
        else:
            item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
            self.db.add(item)
        self.db.flush()
        return item

    def add_item(self, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
        item = self._stage_add(user_id, product_id, quantity)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Cart add: user={user_id} product={product_id} quantity={item.quantity}")
        return item

    def _owned_item(self, user_id: int, item_id: int) -> CartItem:
        item = self.db.get(CartItem, item_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError("Cart item not found")
        return item

    def update_quantity(self, user_id: int, item_id: int, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")
        item = self._owned_item(user_id, item_id)
        item.quantity = quantity
        self.db.commit()
        self.db.refresh(item)
        return item

    def remove_item(self, user_id: int, item_id: int) -> None:
        item = self._owned_item(user_id, item_id)
        self.db.delete(item)
        self.db.commit()

    def clear(self, user_id: int, commit: bool = True) -> int:
        removed = self.db.query(CartItem).filter(CartItem.user_id == user_id).delete(synchronize_session=False)
        if commit:
            self.db.commit()
        return removed

    @staticmethod
    def parse_local_item(raw: Dict[str, Any]) -> Tuple[int, int]:
        """Read (product_id, quantity) from a browser-side cart entry"""
        if not isinstance(raw, dict):
            raise ValidationError("Cart entry must be an object")
        product_id = raw.get("productId", raw.get("product_id", raw.get("id")))
        quantity = raw.get("quantity", 1)
        try:
            product_id = int(product_id)
            quantity = int(quantity)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid cart entry: {raw}")
        if quantity < 1:
            raise ValidationError(f"Invalid quantity in cart entry: {raw}")
        return product_id, quantity

    def migrate_local_items(self, user_id: int, items: Iterable[Dict[str, Any]]) -> int:
        """
        Merge the anonymous browser cart into the user's persisted cart.

        Entries that do not validate or reference unknown products are skipped
        so one stale entry never blocks sign-in.

        Returns:
            Number of entries merged
        """
        items = list(items or [])
        if not items:
            return 0

        logger.info(f"Migrating {len(items)} local cart items for user {user_id}")
        migrated = 0
        for raw in items:
            try:
                product_id, quantity = self.parse_local_item(raw)
                self._stage_add(user_id, product_id, quantity)
                migrated += 1
            except (ValidationError, NotFoundError) as e:
                logger.warning(f"Skipping local cart item {raw}: {e.message}")

        self.db.commit()
        logger.info(f"Cart migration completed: {migrated}/{len(items)} items merged")
        return migrated


class WishlistService:
    def __init__(self, db: Session, catalog: CatalogService = None):
        self.db = db
        self.catalog = catalog or CatalogService(db)

    def list_items(self, user_id: int) -> List[WishlistItem]:
        return (
            self.db.query(WishlistItem)
            .filter(WishlistItem.user_id == user_id)
            .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
            .all()
        )

    def add_item(self, user_id: int, product_id: int) -> WishlistItem:
        """Adding twice returns the existing row"""
        self.catalog.get_product(product_id)
        existing = (
            self.db.query(WishlistItem)
            .filter(WishlistItem.user_id == user_id, WishlistItem.product_id == product_id)
            .first()
        )
        if existing:
            return existing

        item = WishlistItem(user_id=user_id, product_id=product_id)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info(f"Wishlist add: user={user_id} product={product_id}")
        return item

    def remove_item(self, user_id: int, product_id: int) -> int:
        removed = (
            self.db.query(WishlistItem)
            .filter(WishlistItem.user_id == user_id, WishlistItem.product_id == product_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed
