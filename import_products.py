"""Script to import catalog products from a JSON file through the admin API."""
import argparse
import json
import logging
import httpx
from typing import List, Dict, Any, Tuple

logger = logging.getLogger("import_products")


def load_products(file_path: str) -> List[Dict[str, Any]]:
    """Load products from JSON file."""
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def create_product(client: httpx.Client, product: Dict[str, Any]) -> bool:
    """Create a single product via API."""
    label = f"{product.get('name')} (#{product.get('id')})"
    try:
        response = client.post("/admin/products/", json=product, timeout=30.0)
    except httpx.HTTPError as e:
        logger.error("✗ Error creating %s: %s", label, e)
        return False

    if response.status_code == 201:
        logger.info("✓ Created: %s", label)
        return True

    logger.warning("✗ Failed: %s - %s %s", label, response.status_code, response.text)
    return False


def import_products(client: httpx.Client, products: List[Dict[str, Any]]) -> Tuple[int, int]:
    """Create every product, returning (succeeded, failed) counts."""
    success_count = 0
    failed_count = 0

    for product in products:
        if create_product(client, product):
            success_count += 1
        else:
            failed_count += 1

    return success_count, failed_count


def main():
    parser = argparse.ArgumentParser(description="Import products into the storefront catalog")
    parser.add_argument("file", nargs="?", default="products.json", help="JSON file with a list of products")
    parser.add_argument("--url", default="http://localhost:8000", help="API base URL")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    products = load_products(args.file)
    logger.info("Found %d products in %s", len(products), args.file)
    logger.info("-" * 60)

    with httpx.Client(base_url=args.url, headers={"Content-Type": "application/json"}) as client:
        success_count, failed_count = import_products(client, products)

    logger.info("-" * 60)
    logger.info("Import complete: %d succeeded, %d failed", success_count, failed_count)


if __name__ == "__main__":
    main()
