"""
Enrichment of Open Food Facts search results.
"""

from typing import Any, Dict, List, Optional


def _resolve_name(product: Dict[str, Any]) -> str:
    name = product.get("product_name") or product.get("product_name_en")
    if name:
        return name
    code = product.get("code")
    return f"Product {code}" if code else "Unknown product"


def _nutrition_grade(product: Dict[str, Any]) -> Optional[str]:
    tags = product.get("nutrition_grades_tags")
    if not isinstance(tags, list) or not tags or not isinstance(tags[0], str):
        return None
    return tags[0].replace("en:", "", 1) or None


def enrich_product(product: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``product`` with a display name and presence flags added."""
    nutriments = product.get("nutriments")
    enriched = dict(product)
    enriched["product_name"] = _resolve_name(product)
    enriched["has_nutrition"] = isinstance(nutriments, dict) and len(nutriments) > 0
    enriched["has_image"] = bool(product.get("image_url"))
    enriched["nutrition_grade"] = _nutrition_grade(product)
    return enriched


def enrich_search_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Enrich every product of a search response, keeping other keys intact."""
    products: List[Dict[str, Any]] = [
        enrich_product(product)
        for product in (payload.get("products") or [])
        if isinstance(product, dict)
    ]
    enriched = dict(payload)
    enriched["products"] = products
    return enriched
