# Overview: Service-layer operations for the product catalog; sole owner of product stock.

"""
Catalog Store

WHY: Products and categories are kept in memory and written back to local
storage as full snapshots after every change. The store is the only code
allowed to change Product.stock.

Deletes never cascade: products may keep a category id that no longer
exists, and historical transactions keep their own name/price snapshots.
"""

from __future__ import annotations

import logging
import uuid

from ..models import Category, Product
from ..time_utils import utcnow
from ..validation import CATEGORY_POLICY, PRODUCT_POLICY, ValidationError, validate_payload
from .storage_service import CATEGORIES_KEY, PRODUCTS_KEY, LocalStorage

logger = logging.getLogger(__name__)


INITIAL_CATEGORIES = [
    {"id": "1", "name": "Clothing"},
    {"id": "2", "name": "Accessories"},
    {"id": "3", "name": "Shoes"},
    {"id": "4", "name": "Jewelry"},
]

INITIAL_PRODUCTS = [
    {
        "id": "1",
        "name": "Summer Dress",
        "description": "Light and comfortable summer dress",
        "price": "49.99",
        "stock": 15,
        "category": "1",
        "barcode": "123456789",
        "image_url": "https://images.pexels.com/photos/981619/pexels-photo-981619.jpeg?auto=compress&cs=tinysrgb&w=300",
    },
    {
        "id": "2",
        "name": "Leather Handbag",
        "description": "Genuine leather handbag",
        "price": "79.99",
        "stock": 8,
        "category": "2",
        "barcode": "987654321",
        "image_url": "https://images.pexels.com/photos/1152077/pexels-photo-1152077.jpeg?auto=compress&cs=tinysrgb&w=300",
    },
    {
        "id": "3",
        "name": "Silver Necklace",
        "description": "Sterling silver pendant necklace",
        "price": "29.99",
        "stock": 20,
        "category": "4",
        "barcode": "456789123",
        "image_url": "https://images.pexels.com/photos/1413420/pexels-photo-1413420.jpeg?auto=compress&cs=tinysrgb&w=300",
    },
    {
        "id": "4",
        "name": "Ankle Boots",
        "description": "Stylish ankle boots with low heel",
        "price": "59.99",
        "stock": 12,
        "category": "3",
        "barcode": "789123456",
        "image_url": "https://images.pexels.com/photos/267320/pexels-photo-267320.jpeg?auto=compress&cs=tinysrgb&w=300",
    },
]


def _new_id() -> str:
    return str(uuid.uuid4())


class CatalogStore:
    def __init__(self, storage: LocalStorage, *, seed: bool = True, low_stock_threshold: int = 5):
        self.storage = storage
        self.seed = seed
        self.low_stock_threshold = low_stock_threshold
        self._products: list[Product] = []
        self._categories: list[Category] = []

    # -- lifecycle --

    def load(self) -> None:
        """Read both snapshots from storage, seeding the demo catalog when absent."""
        saved_products = self.storage.get_item(PRODUCTS_KEY)
        saved_categories = self.storage.get_item(CATEGORIES_KEY)

        if saved_products is not None:
            self._products = [Product.from_dict(row) for row in saved_products]
        elif self.seed:
            self._products = [Product.from_dict(row) for row in INITIAL_PRODUCTS]
        else:
            self._products = []

        if saved_categories is not None:
            self._categories = [Category.from_dict(row) for row in saved_categories]
        elif self.seed:
            self._categories = [Category.from_dict(row) for row in INITIAL_CATEGORIES]
        else:
            self._categories = []

        self._save()
        logger.info(
            "Catalog loaded: %d products, %d categories",
            len(self._products),
            len(self._categories),
        )

    def reset(self) -> None:
        """Drop the stored snapshots and load again (re-seeding when enabled)."""
        self.storage.remove_item(PRODUCTS_KEY)
        self.storage.remove_item(CATEGORIES_KEY)
        self.load()

    def close(self) -> None:
        self._products = []
        self._categories = []

    def _save(self) -> None:
        self._save_products()
        self._save_categories()

    def _save_products(self) -> None:
        self.storage.set_item(PRODUCTS_KEY, [p.to_dict() for p in self._products])

    def _save_categories(self) -> None:
        self.storage.set_item(CATEGORIES_KEY, [c.to_dict() for c in self._categories])

    # -- products --

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def list_products(self, search: str | None = None) -> list[Product]:
        """Products whose name, description or barcode contains `search` (case-insensitive)."""
        if not search:
            return list(self._products)
        term = search.strip().lower()
        return [
            p for p in self._products
            if term in p.name.lower()
            or term in p.description.lower()
            or (p.barcode is not None and term in p.barcode.lower())
        ]

    def low_stock_products(self, threshold: int | None = None) -> list[Product]:
        limit = self.low_stock_threshold if threshold is None else threshold
        return [p for p in self._products if p.stock <= limit]

    def get_product_by_id(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def add_product(self, fields: dict) -> Product:
        patch = validate_payload(payload=fields, policy=PRODUCT_POLICY, partial=False)
        now = utcnow()
        product = Product(
            id=_new_id(),
            name=patch["name"],
            price=patch["price"],
            stock=patch.get("stock", 0),
            description=patch.get("description", ""),
            category=patch.get("category", ""),
            barcode=patch.get("barcode"),
            image_url=patch.get("image_url"),
            created_at=now,
            updated_at=now,
        )
        self._products.append(product)
        self._save_products()
        logger.info("Product added: %s (%s)", product.name, product.id)
        return product

    def update_product(self, product_id: str, fields: dict) -> Product | None:
        """Merge `fields` into the product. Unknown ids are a no-op and return None."""
        patch = validate_payload(payload=fields, policy=PRODUCT_POLICY, partial=True)
        product = self.get_product_by_id(product_id)
        if product is None:
            return None

        for key, value in patch.items():
            setattr(product, key, value)
        product.updated_at = utcnow()
        self._save_products()
        logger.info("Product updated: %s (%s)", product.name, product.id)
        return product

    def delete_product(self, product_id: str) -> bool:
        remaining = [p for p in self._products if p.id != product_id]
        if len(remaining) == len(self._products):
            return False
        self._products = remaining
        self._save_products()
        logger.info("Product deleted: %s", product_id)
        return True

    def update_stock(self, product_id: str, delta: int) -> Product | None:
        """
        Apply a stock change, clamped at zero.

        Over-decrements never raise; the stock simply floors at 0. The delta
        must be a whole number (floats and bools raise ValidationError).
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("delta must be a whole number")

        product = self.get_product_by_id(product_id)
        if product is None:
            return None

        product.stock = max(0, product.stock + delta)
        product.updated_at = utcnow()
        self._save_products()
        return product

    # -- categories --

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    def list_categories(self) -> list[Category]:
        return list(self._categories)

    def get_category_by_id(self, category_id: str) -> Category | None:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def add_category(self, name: str) -> Category:
        patch = validate_payload(payload={"name": name}, policy=CATEGORY_POLICY, partial=False)
        category = Category(id=_new_id(), name=patch["name"])
        self._categories.append(category)
        self._save_categories()
        logger.info("Category added: %s (%s)", category.name, category.id)
        return category

    def update_category(self, category_id: str, name: str) -> Category | None:
        patch = validate_payload(payload={"name": name}, policy=CATEGORY_POLICY, partial=True)
        category = self.get_category_by_id(category_id)
        if category is None:
            return None
        category.name = patch["name"]
        self._save_categories()
        return category

    def delete_category(self, category_id: str) -> bool:
        remaining = [c for c in self._categories if c.id != category_id]
        if len(remaining) == len(self._categories):
            return False
        self._categories = remaining
        self._save_categories()
        logger.info("Category deleted: %s", category_id)
        return True
