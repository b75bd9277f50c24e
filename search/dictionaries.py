"""
Static lookup tables used by the query normalizer and suggestion synthesizer.

Both tables are read-only mappings so a request can never mutate them; callers
that need different data (tests, other storefronts) pass their own mapping in.
"""
from types import MappingProxyType
from typing import Mapping, Sequence

# token -> spelling variants added to the token set
COMMON_TYPOS: Mapping[str, Sequence[str]] = MappingProxyType({
    "panjabi": ("panjabi", "punjabi"),
    "collection": ("collection", "collecton", "colection"),
    "best": ("best", "bests"),
    "2025": ("2025", "2024", "2023", "2022"),
    "shirt": ("shirt", "shirts", "shart", "shert"),
    "t-shirt": ("t-shirt", "tshirt", "tee shirt", "t shirt"),
    "honey": ("honey", "honi", "hone"),
    "nuts": ("nuts", "nut", "nutts"),
    "attar": ("attar", "atar", "attarr"),
    "sports": ("sports", "sport", "spotrs"),
    "fashion": ("fashion", "fashon", "fashin"),
})

# query fragment -> related searches shown as suggestions
RELATED_TERMS: Mapping[str, Sequence[str]] = MappingProxyType({
    "panjabi": ("Punjabi Dress", "Salwar Kameez", "Traditional Wear", "Ethnic Dress"),
    "shirt": ("T-Shirt", "Formal Shirt", "Casual Shirt", "Polo Shirt"),
    "2025": ("2024 Collection", "Latest Fashion", "New Arrivals", "Trending Now"),
    "honey": ("Honey Products", "Natural Honey", "Organic Honey", "Pure Honey"),
    "nuts": ("Dry Fruits", "Mixed Nuts", "Almonds", "Cashews"),
    "sports": ("Sports Wear", "Gym Clothes", "Athletic Wear", "Fitness Gear"),
    "attar": ("Perfume", "Fragrance", "Scent", "Aroma"),
    "best": ("Top Rated", "Popular", "Recommended", "Best Selling"),
})
