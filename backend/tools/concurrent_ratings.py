"""
Fire concurrent rating submissions at one product and print the resulting
average. Ratings race on the stored average (last writer wins); this shows
that the value read afterwards still matches the formula over all ratings.

Usage:
    python tools/concurrent_ratings.py <product_id> --workers 8 --value 4.5
"""
import argparse
import concurrent.futures
import os

import requests

BASE = os.environ.get("CATALOG_BASE", "http://127.0.0.1:8000")


def rate_task(i, product_id, value):
    try:
        r = requests.post(f"{BASE}/api/products/{product_id}/ratings", json={"value": value}, timeout=10)
        return (i, r.status_code, r.text)
    except Exception as e:
        return (i, "ERR", str(e))


def run(product_id, workers, value):
    print(f"Running rating test: workers={workers}, product={product_id}, value={value}")
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(rate_task, i, product_id, value) for i in range(workers)]
        for f in futures:
            print(f.result())
    r = requests.get(f"{BASE}/api/products/{product_id}", timeout=10)
    body = r.json()
    print("average_rating:", body.get("average_rating"), "rating_count:", body.get("rating_count"))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Concurrent rating submissions.")
    parser.add_argument("product_id")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--value", type=float, default=4.5)
    args = parser.parse_args()
    run(args.product_id, args.workers, args.value)
