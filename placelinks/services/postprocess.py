"""Post-processing of raw place data: category labels, price tiers, city, category group.

The lookup tables are plain data. Extend them here without touching the
functions below.
"""

import re
from types import MappingProxyType
from typing import Iterable, Optional

CATEGORY_LABELS = MappingProxyType(
    {
        "restaurant": "Restaurant",
        "cafe": "Cafe",
        "coffee_shop": "Coffee Shop",
        "bar": "Bar",
        "bakery": "Bakery",
        "meal_takeaway": "Takeaway",
        "meal_delivery": "Delivery",
        "food": "Food",
        "lodging": "Hotel",
        "hotel": "Hotel",
        "hostel": "Hostel",
        "tourist_attraction": "Attraction",
        "museum": "Museum",
        "park": "Park",
        "shopping_mall": "Shopping Mall",
        "store": "Store",
        "subway_station": "Subway Station",
        "train_station": "Train Station",
        "transit_station": "Transit Station",
        "airport": "Airport",
        "temple": "Temple",
        "shrine": "Shrine",
        "church": "Church",
        "spa": "Spa",
        "gym": "Gym",
        "night_club": "Night Club",
        "amusement_park": "Amusement Park",
        "aquarium": "Aquarium",
        "zoo": "Zoo",
        "art_gallery": "Art Gallery",
        "japanese_restaurant": "Japanese Restaurant",
        "sushi_restaurant": "Sushi Restaurant",
        "ramen_restaurant": "Ramen Restaurant",
        "izakaya": "Izakaya",
        "ice_cream_shop": "Ice Cream Shop",
    }
)

PRICE_LEVELS = MappingProxyType(
    {
        "PRICE_LEVEL_FREE": "Free",
        "PRICE_LEVEL_INEXPENSIVE": "$",
        "PRICE_LEVEL_MODERATE": "$$",
        "PRICE_LEVEL_EXPENSIVE": "$$$",
        "PRICE_LEVEL_VERY_EXPENSIVE": "$$$$",
    }
)

# Order matters: the first city found in the address wins.
KNOWN_CITIES = (
    "Tokyo",
    "Osaka",
    "Kyoto",
    "Nara",
    "Hiroshima",
    "Fukuoka",
    "Sapporo",
    "Yokohama",
    "Nagoya",
    "Kobe",
    "Sendai",
    "Kanazawa",
    "Nikko",
    "Hakone",
    "Kamakura",
    "Takayama",
    "Shirakawa",
    "Miyajima",
    "Naoshima",
)

_COUNTRY_NAME = "Japan"
_POSTAL_MARK = "〒"
_LEADING_CITY_SPACE = re.compile(r"^(Osaka|Tokyo|Kyoto|Nara)\s+")

# Coarse groups used to filter the link list. Based on the Places API type
# table; group order decides ties.
CATEGORY_GROUPS = MappingProxyType(
    {
        "Food": (
            "restaurant", "food", "cafe", "cafeteria", "bar", "bar_and_grill", "bakery",
            "meal_takeaway", "meal_delivery", "coffee_shop", "tea_house", "wine_bar", "pub",
            "fast_food_restaurant", "fine_dining_restaurant", "buffet_restaurant", "diner",
            "american_restaurant", "asian_restaurant", "brazilian_restaurant", "chinese_restaurant",
            "french_restaurant", "greek_restaurant", "indian_restaurant", "indonesian_restaurant",
            "italian_restaurant", "japanese_restaurant", "korean_restaurant", "lebanese_restaurant",
            "mediterranean_restaurant", "mexican_restaurant", "middle_eastern_restaurant",
            "pizza_restaurant", "ramen_restaurant", "seafood_restaurant", "spanish_restaurant",
            "steak_house", "sushi_restaurant", "thai_restaurant", "turkish_restaurant",
            "vegan_restaurant", "vegetarian_restaurant", "vietnamese_restaurant",
            "breakfast_restaurant", "brunch_restaurant", "dessert_restaurant", "hamburger_restaurant",
            "ice_cream_shop", "juice_shop", "sandwich_shop", "acai_shop", "afghani_restaurant",
            "african_restaurant", "bagel_shop", "barbecue_restaurant", "candy_store", "cat_cafe",
            "chocolate_factory", "chocolate_shop", "confectionery", "deli", "dessert_shop",
            "dog_cafe", "donut_shop", "food_court", "izakaya",
        ),
        "Hotels": (
            "lodging", "hotel", "motel", "hostel", "resort_hotel", "bed_and_breakfast",
            "campground", "camping_cabin", "cottage", "extended_stay_hotel", "farmstay",
            "guest_house", "inn", "japanese_inn", "budget_japanese_inn", "mobile_home_park",
            "private_guest_room", "rv_park",
        ),
        "Attractions": (
            "tourist_attraction", "museum", "park", "amusement_park", "aquarium", "zoo",
            "art_gallery", "place_of_worship", "church", "hindu_temple", "mosque", "synagogue",
            "national_park", "state_park", "botanical_garden", "garden", "marina", "movie_theater",
            "night_club", "performing_arts_theater", "stadium", "theme_park", "water_park",
            "historical_landmark", "historical_place", "cultural_landmark", "monument", "sculpture",
            "amphitheatre", "amusement_center", "banquet_hall", "bowling_alley", "casino",
            "comedy_club", "community_center", "concert_hall", "convention_center", "cultural_center",
            "dance_hall", "dog_park", "event_venue", "ferris_wheel", "hiking_area", "internet_cafe",
            "karaoke", "observation_deck", "opera_house", "philharmonic_hall", "picnic_ground",
            "planetarium", "plaza", "roller_coaster", "skateboard_park", "video_arcade",
            "visitor_center", "wedding_venue", "wildlife_park", "wildlife_refuge", "beach",
            "spa", "fitness_center", "gym", "swimming_pool", "golf_course", "ski_resort",
            "temple", "shrine",
        ),
        "Shopping": (
            "shopping_mall", "store", "clothing_store", "department_store", "convenience_store",
            "supermarket", "grocery_store", "market", "book_store", "electronics_store",
            "furniture_store", "gift_shop", "hardware_store", "home_goods_store", "home_improvement_store",
            "jewelry_store", "liquor_store", "pet_store", "shoe_store", "sporting_goods_store",
            "asian_grocery_store", "auto_parts_store", "bicycle_store", "butcher_shop",
            "cell_phone_store", "discount_store", "food_store", "warehouse_store", "wholesaler",
        ),
        "Transport": (
            "transit_station", "airport", "international_airport", "train_station", "subway_station",
            "bus_station", "bus_stop", "ferry_terminal", "light_rail_station", "taxi_stand",
            "heliport", "airstrip", "park_and_ride", "transit_depot", "truck_stop",
        ),
    }
)
OTHER_GROUP = "Other"


def format_place_type(place_type: Optional[str]) -> Optional[str]:
    """Return a human label for a raw place type tag (``boat_ramp`` → ``Boat Ramp``)."""
    if not place_type:
        return None
    label = CATEGORY_LABELS.get(place_type)
    if label:
        return label
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), place_type.replace("_", " "))


def map_price_level(price_level: Optional[str]) -> Optional[str]:
    """Map a ``PRICE_LEVEL_*`` enum to ``Free`` / ``$``…``$$$$``; unknown tiers give None."""
    if not price_level:
        return None
    return PRICE_LEVELS.get(price_level)


def _find_known_city(text: str) -> Optional[str]:
    for city in KNOWN_CITIES:
        if city in text:
            return city
    return None


def extract_city(address: Optional[str]) -> Optional[str]:
    """Guess the city of a formatted address.

    Only cities in :data:`KNOWN_CITIES` are ever returned. The whole address
    is scanned first; failing that, each comma-separated part that is not a
    postal code, the country or a street number is checked on its own.
    """
    if not address:
        return None

    city = _find_known_city(address)
    if city:
        return city

    for part in (p.strip() for p in address.split(",")):
        if not part or _POSTAL_MARK in part or part == _COUNTRY_NAME or part[0].isdigit():
            continue
        city = _find_known_city(_LEADING_CITY_SPACE.sub(r"\1", part))
        if city:
            return city

    return None


def category_group(types: Optional[Iterable[str]], category: Optional[str] = None) -> str:
    """Return the coarse group (``Food``, ``Hotels``…) for a place, or ``Other``.

    Raw types are checked first; the category label is the fallback.
    """
    type_list = list(types or ())
    if type_list:
        for group, group_types in CATEGORY_GROUPS.items():
            if any(t in group_types for t in type_list):
                return group

    if category:
        tag = category.lower().replace(" ", "_")
        for group, group_types in CATEGORY_GROUPS.items():
            if tag in group_types:
                return group

    return OTHER_GROUP
