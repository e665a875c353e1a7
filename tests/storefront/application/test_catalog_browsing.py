"""Application tests for catalog queries."""

import pytest


def _ids(products):
    return [str(product.id) for product in products]


class TestCatalogQueries:
    def test_ordered(self, seeded_catalog):
        assert _ids(seeded_catalog.ordered()) == ["p1", "p2", "p3", "p4"]

    def test_featured(self, seeded_catalog):
        assert _ids(seeded_catalog.featured()) == ["p1", "p2"]

    def test_find(self, seeded_catalog):
        assert seeded_catalog.find("p4").name == "Electric Fruit Blender"
        assert seeded_catalog.find("missing") is None
        assert seeded_catalog.find("") is None

    def test_next_position(self, seeded_catalog):
        assert seeded_catalog.next_position() == 4


class TestBrowse:
    def test_default_is_catalog_order(self, seeded_catalog):
        assert _ids(seeded_catalog.browse()) == ["p1", "p2", "p3", "p4"]

    def test_filter_by_category(self, seeded_catalog):
        assert _ids(seeded_catalog.browse(category="electronics")) == ["p1", "p2"]

    def test_search_is_case_insensitive_over_name_and_description(self, seeded_catalog):
        assert _ids(seeded_catalog.browse(search="WATCH")) == ["p1"]
        assert _ids(seeded_catalog.browse(search="leather")) == ["p3"]
        assert _ids(seeded_catalog.browse(search="noise cancelling")) == ["p2"]

    def test_max_price(self, seeded_catalog):
        assert _ids(seeded_catalog.browse(max_price=120)) == ["p3", "p4"]

    @pytest.mark.parametrize(
        "sort, expected",
        [
            ("newest", ["p1", "p2", "p3", "p4"]),
            ("price-low", ["p3", "p4", "p2", "p1"]),
            ("price-high", ["p1", "p2", "p4", "p3"]),
            ("rating", ["p2", "p1", "p3", "p4"]),
            ("bogus", ["p1", "p2", "p3", "p4"]),
        ],
    )
    def test_sort(self, seeded_catalog, sort, expected):
        assert _ids(seeded_catalog.browse(sort=sort)) == expected

    def test_filters_combine(self, seeded_catalog):
        result = seeded_catalog.browse(category="electronics", max_price=200, sort="price-low")
        assert _ids(result) == ["p2"]
