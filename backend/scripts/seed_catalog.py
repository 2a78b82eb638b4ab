#!/usr/bin/env python3
"""
Seed catalog reference data (categories, sub-categories, manufacturers and
suppliers) from a JSON file (scripts/data/catalog.json by default).
Safe to run repeatedly: existing rows are left alone.

Usage:
    python scripts/seed_catalog.py --file scripts/data/catalog.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from catalog.db import SessionLocal, init_db
from catalog.models.category import Category, SubCategory
from catalog.models.manufacturer import Manufacturer
from catalog.models.supplier import Supplier
from catalog.utils.logs import get_logger

log = get_logger("catalog.seed")

DEFAULT_SOURCE = os.path.join(os.path.dirname(__file__), "data", "catalog.json")


def _ensure(db, model, **fields):
    row = db.query(model).filter_by(**fields).first()
    if row:
        return row, False
    row = model(**fields)
    db.add(row)
    db.flush()
    return row, True


def seed(db, data: dict) -> int:
    """Insert missing reference rows from ``data``; returns how many were created."""
    created = 0
    for entry in data.get("categories", []):
        category, new = _ensure(db, Category, name=entry["name"])
        created += new
        for name in entry.get("sub_categories", []):
            sc = db.query(SubCategory).filter(SubCategory.name == name).first()
            if sc is None:
                db.add(SubCategory(name=name, category_id=category.id))
                db.flush()
                created += 1
    for name in data.get("manufacturers", []):
        created += _ensure(db, Manufacturer, name=name)[1]
    for name in data.get("suppliers", []):
        created += _ensure(db, Supplier, name=name)[1]
    return created


def seed_from_file(path: str):
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Failed to parse JSON from {path}: {e}")

    init_db()
    db = SessionLocal()
    try:
        created = seed(db, data)
        db.commit()
        log.info(f"Seeded reference rows: {created}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=DEFAULT_SOURCE, help="Path to catalog reference JSON")
    args = parser.parse_args()
    if not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed_from_file(args.file)
