#!/usr/bin/env python3
"""
Seed script: generates a product catalog and indexes it through the API (POST /products/bulk).
Run: API and Elasticsearch must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --count 1000 --batch-size 200
"""

import argparse
import random
import sys
from pathlib import Path

# Project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import httpx

API_BASE = "http://localhost:8000"

NAMES = [
    "Red Shoes", "Red Hat", "Running Shoes", "Leather Boots", "Wool Scarf",
    "Laptop Stand", "Mechanical Keyboard", "Wireless Mouse", "Bluetooth Headphones",
    "Webcam 4K", "USB-C Cable", "Coffee Maker", "Electric Kettle", "Toaster",
    "Blender", "Air Fryer", "Backpack", "Laptop Bag", "Ring Light", "Tripod",
]

CATEGORIES = ["Clothing", "Footwear", "Electronics", "Kitchen", "Accessories"]

DESCRIPTIONS = [
    "Great for home office and remote work.",
    "High quality build and reliable performance.",
    "Popular choice for everyday use.",
    "Lightweight and durable.",
]


def random_product(product_id: int) -> dict:
    name = random.choice(NAMES)
    if random.random() > 0.5:
        name += " " + str(random.randint(1, 999))
    return {
        "id": product_id,
        "name": name,
        "price": round(random.uniform(1, 500), 2),
        "description": random.choice(DESCRIPTIONS),
        "category": random.choice(CATEGORIES),
        "isActive": random.random() > 0.1,
    }


def main():
    ap = argparse.ArgumentParser(description="Seed products via API")
    ap.add_argument("--count", type=int, default=200, help="Number of products to create")
    ap.add_argument("--batch-size", type=int, default=100, help="Products per bulk request")
    ap.add_argument("--start-id", type=int, default=1, help="First product id")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    products = [random_product(args.start_id + i) for i in range(args.count)]
    created = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        for start in range(0, len(products), args.batch_size):
            batch = products[start:start + args.batch_size]
            try:
                r = client.post("/products/bulk", json=batch)
                if r.status_code == 200:
                    created += len(batch)
                else:
                    errors.append(f"Batch at {start}: {r.status_code} {r.text[:120]}")
            except httpx.HTTPError as e:
                errors.append(f"Batch at {start}: {e}")
            print(f"  ... {min(start + args.batch_size, len(products))}/{len(products)} sent")

    print(f"\nDone. Products indexed: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")
    print("\nTry: curl -s 'http://localhost:8000/products/suggest?prefix=red'")


if __name__ == "__main__":
    main()
