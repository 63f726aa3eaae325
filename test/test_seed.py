from storefront.models import Category, Product, ProductReview, Subcategory
from storefront.seed import CATEGORIES, DEALS, PRODUCTS, CatalogSeeder
from storefront.utils import init_db


def test_check_and_seed_fills_empty_catalog(db):
    with CatalogSeeder(db) as seeder:
        assert seeder.check_and_seed() is True
        assert seeder.check_and_seed() is False

    assert db.query(Category).count() == len(CATEGORIES)
    assert db.query(Subcategory).count() == sum(len(children) for _, _, children in CATEGORIES)
    assert db.query(Product).count() == len(PRODUCTS) + len(DEALS)
    assert db.query(Product).filter(Product.featured.is_(True)).count() == 6


def test_seeded_deals_are_active(db):
    with CatalogSeeder(db) as seeder:
        seeder.check_and_seed()
    deals = db.query(Product).filter(Product.is_deal.is_(True)).all()
    assert deals
    assert all(product.deal_active for product in deals)


def test_seeded_catalog_is_served(client, db):
    with CatalogSeeder(db) as seeder:
        seeder.check_and_seed()
    assert len(client.get("/api/products/featured").json()) == 6
    assert len(client.get("/api/products/deals").json()) == len(DEALS)


def test_generate_reviews(db):
    with CatalogSeeder(db) as seeder:
        assert seeder.generate_reviews(5) == []
        seeder.check_and_seed()
        reviews = seeder.generate_reviews(5)

    assert len(reviews) == 5
    assert db.query(ProductReview).count() == 5
    assert all(1 <= review.rating <= 5 for review in db.query(ProductReview))


def test_init_db_without_flags_prints_help(capsys):
    init_db.main([])
    assert "--reset" in capsys.readouterr().out
