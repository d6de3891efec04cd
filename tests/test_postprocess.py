"""Tests for placelinks.services.postprocess."""

import pytest

from placelinks.services.postprocess import (
    CATEGORY_LABELS,
    KNOWN_CITIES,
    PRICE_LEVELS,
    category_group,
    extract_city,
    format_place_type,
    map_price_level,
)


# ---------------------------------------------------------------------------
# Category labels
# ---------------------------------------------------------------------------

class TestFormatPlaceType:
    def test_known_tags(self):
        assert format_place_type("lodging") == "Hotel"
        assert format_place_type("tourist_attraction") == "Attraction"
        assert format_place_type("ramen_restaurant") == "Ramen Restaurant"

    def test_unknown_tag_is_title_cased(self):
        assert format_place_type("boat_ramp") == "Boat Ramp"
        assert format_place_type("historical_landmark") == "Historical Landmark"

    def test_missing_tag(self):
        assert format_place_type(None) is None
        assert format_place_type("") is None

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_LABELS["new_tag"] = "New"


# ---------------------------------------------------------------------------
# Price levels
# ---------------------------------------------------------------------------

class TestMapPriceLevel:
    @pytest.mark.parametrize(
        "raw, label",
        [
            ("PRICE_LEVEL_FREE", "Free"),
            ("PRICE_LEVEL_INEXPENSIVE", "$"),
            ("PRICE_LEVEL_MODERATE", "$$"),
            ("PRICE_LEVEL_EXPENSIVE", "$$$"),
            ("PRICE_LEVEL_VERY_EXPENSIVE", "$$$$"),
        ],
    )
    def test_known_tiers(self, raw, label):
        assert map_price_level(raw) == label

    def test_unknown_and_absent_tiers_are_none(self):
        assert map_price_level("PRICE_LEVEL_UNSPECIFIED") is None
        assert map_price_level("") is None
        assert map_price_level(None) is None

    def test_five_tiers(self):
        assert len(PRICE_LEVELS) == 5


# ---------------------------------------------------------------------------
# City heuristic
# ---------------------------------------------------------------------------

class TestExtractCity:
    def test_postal_marked_japanese_address(self):
        assert extract_city("Japan, 〒104-0045 Tokyo, Chuo City, Tsukiji, 4 Chome−16−2") == "Tokyo"

    def test_english_address(self):
        assert extract_city("68 Fukakusa Yabunouchicho, Fushimi Ward, Kyoto, 612-0882, Japan") == "Kyoto"

    def test_first_city_in_list_order_wins(self):
        # "Osaka" appears first in the text but "Tokyo" comes first in the list.
        assert extract_city("Osaka-ya, Tokyo, Japan") == "Tokyo"

    def test_unknown_city(self):
        assert extract_city("1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA") is None

    def test_country_only(self):
        assert extract_city("Japan") is None

    def test_missing_address(self):
        assert extract_city(None) is None
        assert extract_city("") is None

    def test_allow_list_order(self):
        assert KNOWN_CITIES[0] == "Tokyo"
        assert "Naoshima" in KNOWN_CITIES


# ---------------------------------------------------------------------------
# Category groups
# ---------------------------------------------------------------------------

class TestCategoryGroup:
    def test_types_decide_group(self):
        assert category_group(["ramen_restaurant", "food", "point_of_interest"]) == "Food"
        assert category_group(["lodging"]) == "Hotels"
        assert category_group(["subway_station"]) == "Transport"

    def test_group_order_breaks_ties(self):
        # "spa" is an attraction, "store" is shopping; Attractions comes first.
        assert category_group(["store", "spa"]) == "Attractions"

    def test_category_label_fallback(self):
        assert category_group([], "Shopping Mall") == "Shopping"
        assert category_group(None, "Train Station") == "Transport"

    def test_unknown_is_other(self):
        assert category_group(["point_of_interest"], "Something Else") == "Other"
        assert category_group(None, None) == "Other"
