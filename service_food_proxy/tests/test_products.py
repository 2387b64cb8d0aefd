"""
Unit tests for OFF search result enrichment.
"""

from service_food_proxy.app.domain.products import enrich_product, enrich_search_payload


class TestEnrichProduct:
    """Test cases for enrich_product."""

    def test_localized_name_wins(self):
        product = {"code": "1", "product_name": "Pâte à tartiner", "product_name_en": "Spread"}
        assert enrich_product(product)["product_name"] == "Pâte à tartiner"

    def test_falls_back_to_english_name(self):
        product = {"code": "1", "product_name": "", "product_name_en": "Spread"}
        assert enrich_product(product)["product_name"] == "Spread"

    def test_falls_back_to_code(self):
        assert enrich_product({"code": "3017620422003"})["product_name"] == "Product 3017620422003"

    def test_flags(self):
        enriched = enrich_product({
            "code": "1",
            "nutriments": {"energy-kcal_100g": 539},
            "image_url": "https://images.example/1.jpg",
        })
        assert enriched["has_nutrition"] is True
        assert enriched["has_image"] is True

    def test_flags_absent(self):
        enriched = enrich_product({"code": "1", "nutriments": {}, "image_url": ""})
        assert enriched["has_nutrition"] is False
        assert enriched["has_image"] is False

    def test_nutrition_grade_from_tags(self):
        enriched = enrich_product({"code": "1", "nutrition_grades_tags": ["en:e", "en:d"]})
        assert enriched["nutrition_grade"] == "e"

    def test_nutrition_grade_without_prefix(self):
        assert enrich_product({"code": "1", "nutrition_grades_tags": ["b"]})["nutrition_grade"] == "b"

    def test_nutrition_grade_missing(self):
        assert enrich_product({"code": "1"})["nutrition_grade"] is None
        assert enrich_product({"code": "1", "nutrition_grades_tags": []})["nutrition_grade"] is None

    def test_original_fields_kept_and_input_untouched(self):
        product = {"code": "1", "brands": "Ferrero"}
        enriched = enrich_product(product)
        assert enriched["brands"] == "Ferrero"
        assert "has_image" not in product

    def test_non_list_grade_tags_are_ignored(self):
        assert enrich_product({"code": "1", "nutrition_grades_tags": {"a": 1}})["nutrition_grade"] is None
        assert enrich_product({"code": "1", "nutrition_grades_tags": "en:a"})["nutrition_grade"] is None

    def test_missing_code_has_readable_name(self):
        assert enrich_product({})["product_name"] == "Unknown product"


class TestEnrichSearchPayload:
    """Test cases for enrich_search_payload."""

    def test_keeps_top_level_keys(self):
        payload = {"count": 2, "page": 1, "products": [{"code": "1"}, {"code": "2"}]}
        enriched = enrich_search_payload(payload)
        assert enriched["count"] == 2
        assert enriched["page"] == 1
        assert [p["product_name"] for p in enriched["products"]] == ["Product 1", "Product 2"]

    def test_missing_products_becomes_empty_list(self):
        assert enrich_search_payload({"count": 0})["products"] == []

