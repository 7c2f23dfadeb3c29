import logging
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from inventory_api.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

SAMPLE_PRODUCTS = [
    {"name": "Laptop", "description": "High-performance laptop", "price": Decimal("999.99"), "stock_quantity": 15, "category": "Electronics"},
    {"name": "Mouse", "description": "Wireless mouse", "price": Decimal("29.99"), "stock_quantity": 3, "category": "Electronics"},
    {"name": "Desk Chair", "description": "Ergonomic office chair", "price": Decimal("199.99"), "stock_quantity": 8, "category": "Furniture"},
]

def init_db(reset: bool = False, seed: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - If reset is true, drop & recreate tables (tests use this for a clean DB).
      - Otherwise, leave existing tables in place.
      - If seed is true and the products table is empty, insert SAMPLE_PRODUCTS.

    Model modules are imported here so metadata is populated before create_all.
    """
    import importlib

    importlib.import_module("inventory_api.models.product")

    if reset:
        logger.info("Resetting database schema")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    logger.debug("Database tables created")

    if seed:
        _seed_sample_products()

def _seed_sample_products():
    from inventory_api.models.product import Product, utcnow

    s = SessionLocal()
    try:
        if s.query(Product).first() is not None:
            return
        now = utcnow()
        for ent in SAMPLE_PRODUCTS:
            s.add(Product(is_active=True, created_at=now, updated_at=now, **ent))
        s.commit()
        logger.info("Seeded %d sample products", len(SAMPLE_PRODUCTS))
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
