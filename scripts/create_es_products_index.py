#!/usr/bin/env python3
"""
Create the Elasticsearch products index with raw HTTP (no Python ES client).
Use this when you want the index (and its completion mapping) before the API first starts:
  python scripts/create_es_products_index.py
  python scripts/create_es_products_index.py --recreate

Reads ELASTICSEARCH_URL / ELASTICSEARCH_INDEX / credentials from .env.
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import httpx
from app.config import get_settings
from app.search.elasticsearch_client import es_client_options, products_index_mappings


def main():
    ap = argparse.ArgumentParser(description="Create the products index")
    ap.add_argument("--recreate", action="store_true", help="Delete the index first if it exists")
    args = ap.parse_args()

    settings = get_settings()
    opts = es_client_options(settings)
    base = opts["hosts"][0].rstrip("/")
    index = settings.elasticsearch_index
    url = f"{base}/{index}"
    body = {
        "settings": {"index": {"number_of_replicas": 0}},
        "mappings": products_index_mappings(),
    }

    with httpx.Client(
        timeout=settings.elasticsearch_request_timeout,
        auth=opts.get("basic_auth"),
        verify=settings.elasticsearch_verify_certs,
    ) as client:
        r = client.head(url)
        if r.status_code == 200:
            if not args.recreate:
                print(f"Index '{index}' already exists. Pass --recreate to drop and create it again.")
                return
            client.delete(url).raise_for_status()
            print(f"Deleted index '{index}'.")
        r = client.put(url, json=body)
        if r.status_code not in (200, 201):
            print(f"Failed to create index: {r.status_code}")
            print(r.text[:500])
            sys.exit(1)
    print(f"Created index '{index}' with number_of_replicas=0.")


if __name__ == "__main__":
    main()
