#!/usr/bin/env python3
"""
Seed products into the inventory database.

Without --file the built-in sample products are loaded. With --file the JSON
may be a list of product entries or an object with an "items" list; each
entry goes through ProductService.create, so invalid entries are reported
and skipped instead of being written.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --file products.json --reset
"""
import argparse
import json
import logging
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inventory_api.db import SAMPLE_PRODUCTS, SessionLocal, init_db
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.services.product_service import ProductService, ProductValidationException
from inventory_api.utils.log import configure_logging

logger = logging.getLogger("inventory_api.scripts.seed")


def _normalize_entry(entry):
    """Return a dict with keys: name, description, price, stock_quantity, category"""
    stock = entry.get("stock_quantity", entry.get("stockQuantity", entry.get("stock")))
    return {
        "name": entry.get("name") or entry.get("title"),
        "description": entry.get("description"),
        "price": entry.get("price"),
        "stock_quantity": stock,
        "category": entry.get("category"),
    }


def load_entries(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of products in {path}")
    return [_normalize_entry(e) for e in data if isinstance(e, dict)]


def seed(entries):
    db = SessionLocal()
    svc = ProductService(ProductRepository(db))
    created = 0
    try:
        for entry in entries:
            try:
                svc.create(entry)
                created += 1
            except ProductValidationException as e:
                problems = ", ".join(f"{v.field}: {v.message}" for v in e.violations)
                logger.warning("Skipping %r (%s)", entry.get("name"), problems)
    finally:
        db.close()
    logger.info("Seeded products: %d of %d", created, len(entries))
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a JSON list of products")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate tables first")
    args = parser.parse_args()

    configure_logging()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)

    init_db(reset=args.reset)
    entries = load_entries(args.file) if args.file else [dict(e) for e in SAMPLE_PRODUCTS]
    seed(entries)
