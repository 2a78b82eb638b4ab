import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
PRODUCT_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Products ===")
cur.execute(
    "SELECT p.id, p.name, p.base_price, p.price, d.value, p.average_rating "
    "FROM products p JOIN discounts d ON d.id = p.discount_id ORDER BY p.name LIMIT 50"
)
for r in cur.fetchall():
    print(
        {
            "id": r[0],
            "name": r[1],
            "base_price": r[2],
            "price": r[3],
            "discount": r[4],
            "average_rating": r[5],
        }
    )

print("\n=== Supplier links ===")
cur.execute(
    "SELECT l.product_id, s.name FROM supplier_links l JOIN suppliers s ON s.id = l.supplier_id LIMIT 50"
)
for r in cur.fetchall():
    print(r)

if PRODUCT_ID:
    print(f"\n=== Ratings for product={PRODUCT_ID} ===")
    cur.execute(
        "SELECT id, value FROM ratings WHERE product_id=? ORDER BY id",
        (PRODUCT_ID,),
    )
    for r in cur.fetchall():
        print(r)

conn.close()
