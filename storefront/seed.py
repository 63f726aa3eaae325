"""
Seed script for the furniture catalog

Fills an empty database with categories, subcategories and products, and can
add generated demo reviews:

    python -m storefront.seed
    python -m storefront.seed --reviews 50
"""
import argparse
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List

from faker import Faker
from loguru import logger
from sqlalchemy.orm import Session

from storefront.config import get_settings
from storefront.models import Category, Product, ProductReview, Subcategory
from storefront.utils.database import SessionLocal, create_tables
from storefront.utils.logger import setup_logging

fake = Faker(["en_IN", "en_US"])

CATEGORIES = [
    ("Dining Tables", "Premium teak dining tables for your family", [
        ("4-Seater Tables", "Perfect for small families"),
        ("6-Seater Tables", "Ideal for medium families"),
        ("8-Seater Tables", "Great for large families"),
        ("Round Tables", "Classic round dining tables"),
    ]),
    ("Chairs", "Comfortable and elegant teak chairs", [
        ("Dining Chairs", "Comfortable dining chairs"),
        ("Office Chairs", "Ergonomic office chairs"),
        ("Lounge Chairs", "Relaxing lounge chairs"),
        ("Rocking Chairs", "Traditional rocking chairs"),
    ]),
    ("Wardrobes", "Spacious teak wardrobes for storage", [
        ("2-Door Wardrobes", "Compact 2-door designs"),
        ("4-Door Wardrobes", "Large 4-door wardrobes"),
        ("Kids Wardrobes", "Child-friendly designs"),
    ]),
    ("Beds", "Luxurious teak beds for ultimate comfort", [
        ("Queen Size", "Spacious queen beds"),
        ("King Size", "Luxurious king beds"),
        ("Storage Beds", "Beds with storage"),
    ]),
    ("Sofas", "Stylish teak sofas for your living room", [
        ("3-Seater Sofas", "Standard 3-seater sofas"),
        ("L-Shaped Sofas", "Corner L-shaped sofas"),
        ("Recliners", "Comfortable recliner chairs"),
    ]),
    ("Cabinets", "Functional teak cabinets for organization", [
        ("TV Units", "Entertainment TV units"),
        ("Pooja Ghar", "Traditional prayer units"),
        ("Display Units", "Decorative display cabinets"),
    ]),
]

# name, description, price, original price, category, subcategory, image, featured, stock
PRODUCTS = [
    ("Royal Maharaja Dining Table", "Exquisite 8-seater solid teak dining table with hand-carved motifs and brass inlays",
     "75000", "95000", "Dining Tables", "8-Seater Tables", "/images/dining-table.webp", True, 3),
    ("Premium Teak Chair Set", "Set of 6 solid teak dining chairs with traditional design and cushioning",
     "48000", "62000", "Chairs", "Dining Chairs", "/images/chair-set.jpg", True, 8),
    ("Emperor Teak Wardrobe", "4-door solid teak wardrobe with mirror, drawers and brass fittings",
     "85000", "110000", "Wardrobes", "4-Door Wardrobes", "/images/wardrobe.webp", True, 2),
    ("Royal King Size Teak Bed", "King size solid teak bed with storage compartments and carved headboard",
     "95000", "125000", "Beds", "King Size", "/images/bed.jpg", True, 2),
    ("Imperial Teak Sofa", "Solid teak sofa with premium fabric upholstery",
     "85000", "105000", "Sofas", "3-Seater Sofas", "/images/sofa.jpg", True, 3),
    ("Heritage Teak Pooja Ghar", "Solid teak pooja mandir with intricate carvings and storage",
     "58000", "72000", "Cabinets", "Pooja Ghar", "/images/pooja-ghar.jpg", True, 5),
    ("Classic Teak Dining Table", "6-seater solid teak dining table with a clean finish",
     "55000", "68000", "Dining Tables", "6-Seater Tables", "/images/classic-dining.jpg", False, 6),
    ("Ergonomic Chair Set of 4", "Four ergonomic teak chairs for daily use",
     "32000", "40000", "Chairs", "Office Chairs", "/images/ergonomic-chairs.jpg", False, 10),
    ("Spacious Teak Wardrobe", "2-door teak wardrobe with adjustable shelves",
     "72000", "88000", "Wardrobes", "2-Door Wardrobes", "/images/spacious-wardrobe.jpg", False, 4),
    ("Queen Size Teak Bed", "Queen size teak bed with a slatted base",
     "68000", "82000", "Beds", "Queen Size", "/images/queen-bed.jpg", False, 5),
    ("Comfortable Teak Sofa", "Teak frame sofa with deep seat cushions",
     "65000", "78000", "Sofas", "L-Shaped Sofas", "/images/comfortable-sofa.jpg", False, 7),
    ("Traditional Pooja Cabinet", "Compact teak pooja cabinet with bell hooks",
     "38000", "48000", "Cabinets", "Pooja Ghar", "/images/pooja-cabinet.jpg", False, 12),
]

# name, description, price, original price, deal price, category, image, stock
DEALS = [
    ("Modern Teak Chairs - Flash Deal", "Set of 2 modern solid teak chairs, limited time deal",
     "25000", "32000", "1", "Chairs", "/images/modern-chairs.webp", 15),
    ("Teak Temple - ₹1 Deal", "Solid teak temple for home worship, flash sale",
     "35000", "45000", "1", "Cabinets", "/images/temple-pooja.jpg", 8),
    ("Traditional Jhula - Flash Sale", "Handcrafted solid teak jhula swing for garden or porch",
     "45000", "58000", "1", "Sofas", "/images/jhula.jpg", 12),
]

REVIEW_COMMENTS = [
    "Beautiful finish and very sturdy.",
    "Delivered on time and well packed.",
    "The wood quality is excellent, worth the price.",
    "Looks exactly like the pictures.",
    "Assembly took a while but the result is great.",
    "Good value, colour slightly darker than expected.",
]


class CatalogSeeder:
    def __init__(self, db: Session = None):
        self.db = db or SessionLocal()
        self._owns_session = db is None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._owns_session:
            self.db.close()

    def is_seeded(self) -> bool:
        return self.db.query(Category.id).first() is not None

    def check_and_seed(self) -> bool:
        """Seed only an empty catalog; returns True when data was inserted"""
        if self.is_seeded():
            logger.info(f"Database already seeded with {self.db.query(Category).count()} categories")
            return False
        logger.info("Database is empty, seeding categories and products...")
        self.seed_catalog()
        return True

    def seed_catalog(self):
        try:
            categories, subcategories = {}, {}
            for name, description, children in CATEGORIES:
                category = Category(name=name, description=description)
                self.db.add(category)
                categories[name] = category
                for child_name, child_description in children:
                    subcategory = Subcategory(name=child_name, description=child_description, category=category)
                    self.db.add(subcategory)
                    subcategories[child_name] = subcategory

            for name, description, price, original, category, subcategory, image, featured, stock in PRODUCTS:
                self.db.add(Product(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    original_price=Decimal(original),
                    category=categories[category],
                    subcategory=subcategories[subcategory],
                    image_url=image,
                    images=[image],
                    featured=featured,
                    in_stock=True,
                    stock=stock,
                ))

            expiry = datetime.now(timezone.utc) + timedelta(days=1)
            for name, description, price, original, deal_price, category, image, stock in DEALS:
                self.db.add(Product(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    original_price=Decimal(original),
                    category=categories[category],
                    image_url=image,
                    images=[image],
                    is_deal=True,
                    deal_price=Decimal(deal_price),
                    deal_expiry=expiry,
                    in_stock=True,
                    stock=stock,
                ))

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            f"Seeded {len(categories)} categories, {len(subcategories)} subcategories, "
            f"{len(PRODUCTS) + len(DEALS)} products"
        )

    def generate_reviews(self, count: int = 20) -> List[ProductReview]:
        """Generate demo reviews spread over the existing products"""
        products = self.db.query(Product).all()
        if not products:
            logger.warning("No products found, seed the catalog first")
            return []

        reviews = []
        for _ in range(count):
            review = ProductReview(
                product_id=random.choice(products).id,
                user_name=fake.name(),
                rating=random.choices([5, 4, 3, 2, 1], weights=[45, 30, 15, 6, 4])[0],
                comment=random.choice(REVIEW_COMMENTS),
                images=[],
                is_verified=random.random() < 0.7,
            )
            reviews.append(review)
            self.db.add(review)

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Created {len(reviews)} demo reviews")
        return reviews


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed the furniture storefront catalog")
    parser.add_argument("--reviews", type=int, default=0, help="Number of demo reviews to generate")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_dir, settings.log_level, name="seed")
    create_tables()
    with CatalogSeeder() as seeder:
        seeder.check_and_seed()
        if args.reviews:
            seeder.generate_reviews(args.reviews)
    logger.info("Seed script completed")


if __name__ == "__main__":
    main()
