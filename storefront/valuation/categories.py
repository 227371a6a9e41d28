"""
Business category classification and the per-industry value table.
"""
from typing import List, Optional

from storefront.rules import contains_any, first_match

NON_CLASSIFIABLE = "Non-Classifiable Establishments"
RESTAURANTS_FOOD = "Restaurants & Food"
RETAIL = "Retail"
DEFAULT_INDUSTRY = "default"

# Category name -> industry key
CATEGORY_VALUE_MAP = {
    "Agriculture": "agriculture",
    "Automotive & Boat": "automotive_boat",
    "Beauty & Personal Care": "beauty_personal_care",
    "Building & Construction": "building_construction",
    "Communication & Media": "communication_media",
    "Education & Children": "education_children",
    "Entertainment & Recreation": "entertainment_recreation",
    "Financial Services": "financial_services",
    "Health Care & Fitness": "health_care_fitness",
    "Manufacturing": "manufacturing",
    NON_CLASSIFIABLE: "non_classifiable",
    "Online & Technology": "online_technology",
    "Pet Services": "pet_services",
    RESTAURANTS_FOOD: "restaurants_food",
    RETAIL: "retail",
    "Service Businesses": "service_businesses",
    "Transportation & Storage": "transportation_storage",
    "Travel": "travel",
    "Wholesale & Distribution": "wholesale_distributors",
    "Energy": "energy",
    "Engineering": "engineering",
    "Franchise Resales": "franchise_resales",
    "Leisure": "leisure",
    "Real Estate": "real_estate",
    "Tech & Media": "tech_media",
}

# Typical small-business sale values: (base value, industry multiple)
INDUSTRY_MULTIPLIERS = {
    "agriculture": (120000, 1.2),
    "automotive_boat": (85000, 1.0),
    "beauty_personal_care": (45000, 0.9),
    "building_construction": (90000, 1.1),
    "communication_media": (75000, 1.3),
    "education_children": (60000, 1.0),
    "entertainment_recreation": (80000, 0.85),
    "financial_services": (150000, 1.5),
    "health_care_fitness": (110000, 1.4),
    "manufacturing": (200000, 1.3),
    "non_classifiable": (50000, 0.8),
    "online_technology": (100000, 1.8),
    "pet_services": (55000, 1.0),
    "restaurants_food": (65000, 0.75),
    "retail": (70000, 0.65),
    "service_businesses": (55000, 1.2),
    "transportation_storage": (140000, 1.1),
    "travel": (75000, 0.9),
    "wholesale_distributors": (180000, 1.0),
    "energy": (250000, 1.4),
    "engineering": (120000, 1.3),
    "franchise_resales": (85000, 1.0),
    "leisure": (70000, 0.8),
    "real_estate": (95000, 1.2),
    "tech_media": (110000, 1.6),
    DEFAULT_INDUSTRY: (60000, 0.9),
}

# Directory type tag -> category
PLACE_TYPE_CATEGORIES = {
    "restaurant": RESTAURANTS_FOOD,
    "food": RESTAURANTS_FOOD,
    "meal_takeaway": RESTAURANTS_FOOD,
    "bakery": RESTAURANTS_FOOD,
    "cafe": RESTAURANTS_FOOD,
    "bar": RESTAURANTS_FOOD,
    "store": RETAIL,
    "clothing_store": RETAIL,
    "electronics_store": RETAIL,
    "grocery_or_supermarket": RETAIL,
    "pharmacy": RETAIL,
    "book_store": RETAIL,
    "car_dealer": "Automotive & Boat",
    "car_repair": "Automotive & Boat",
    "gas_station": "Automotive & Boat",
    "beauty_salon": "Beauty & Personal Care",
    "spa": "Beauty & Personal Care",
    "hair_care": "Beauty & Personal Care",
    "gym": "Health Care & Fitness",
    "hospital": "Health Care & Fitness",
    "dentist": "Health Care & Fitness",
    "doctor": "Health Care & Fitness",
    "physiotherapist": "Health Care & Fitness",
    "bank": "Financial Services",
    "atm": "Financial Services",
    "insurance_agency": "Financial Services",
    "accounting": "Financial Services",
    "real_estate_agency": "Real Estate",
    "moving_company": "Transportation & Storage",
    "taxi_stand": "Transportation & Storage",
    "travel_agency": "Travel",
    "lodging": "Travel",
    "tourist_attraction": "Entertainment & Recreation",
    "amusement_park": "Entertainment & Recreation",
    "movie_theater": "Entertainment & Recreation",
    "school": "Education & Children",
    "university": "Education & Children",
    "pet_store": "Pet Services",
    "veterinary_care": "Pet Services",
}

# Free-text keyword groups; food is checked first as it dominates storefront photos
CATEGORY_KEYWORD_RULES = [
    (contains_any(
        "food", "restaurant", "cafe", "coffee", "pizza", "burger", "bar", "grill",
        "kitchen", "dining", "eatery", "bistro", "deli", "bakery", "market",
        "food park", "food court", "food truck", "catering", "barbecue", "bbq",
    ), RESTAURANTS_FOOD),
    (contains_any("store", "shop", "retail", "market", "boutique", "outlet", "mall", "plaza"), RETAIL),
    (contains_any("auto", "car", "vehicle", "boat"), "Automotive & Boat"),
    (contains_any("beauty", "salon", "spa", "hair"), "Beauty & Personal Care"),
    (contains_any("construction", "contractor", "building"), "Building & Construction"),
    (contains_any("medical", "health", "dental", "fitness", "gym"), "Health Care & Fitness"),
    (contains_any("tech", "software", "online", "digital", "app", "web", "internet"), "Online & Technology"),
    (contains_any("service", "repair", "consulting", "cleaning", "maintenance", "support"), "Service Businesses"),
    (contains_any("financial", "accounting", "insurance"), "Financial Services"),
    (contains_any("entertainment", "recreation", "gaming"), "Entertainment & Recreation"),
]


def map_place_type_to_category(place_type: str) -> str:
    return PLACE_TYPE_CATEGORIES.get(place_type, NON_CLASSIFIABLE)


def categorize_business_industry(business_type: str, place_types: Optional[List[str]] = None) -> str:
    """
    Classify a business into one of the fixed category names.

    Directory type tags win when any of them maps to a real category;
    otherwise the free-text business type is scanned against keyword groups.

    Args:
        business_type (str): Free-text business type or name.
        place_types (Optional[List[str]]): Directory type tags, in directory order.

    Returns:
        str: Category name, "Non-Classifiable Establishments" when nothing matches.
    """
    for place_type in place_types or []:
        category = map_place_type_to_category(place_type)
        if category != NON_CLASSIFIABLE:
            return category

    return first_match(CATEGORY_KEYWORD_RULES, (business_type or "").lower(), default=NON_CLASSIFIABLE)


def find_industry_match(category: str) -> str:
    """Industry key for a category name; unknown names use the default row."""
    return CATEGORY_VALUE_MAP.get(category, DEFAULT_INDUSTRY)
