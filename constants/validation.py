"""
Validation Constants

Contains whitelist values for validating user input to prevent
injection attacks and ensure data integrity.
"""

from .costing import RECIPE_SINGLE, RECIPE_BATCH
from .units import ALL_UNITS, BASE_UNITS, PIECE_UNITS

# Valid values for recipe item units (whitelist for security)
VALID_UNITS = ALL_UNITS

# Valid values for ingredient pack_unit field (weight and volume packs are
# stored in their base unit, counted packs per piece or slice)
VALID_PACK_UNITS = BASE_UNITS | PIECE_UNITS

# Valid recipe types
VALID_RECIPE_TYPES = {RECIPE_SINGLE, RECIPE_BATCH}

# Maximum field lengths for security
MAX_LENGTHS = {
    'ingredient_name': 200,
    'recipe_name': 200,
    'allergens': 500,
    'supplier': 200,
}

# Upper bounds for numeric input
MAX_PRICE = 999999.99
MAX_QUANTITY = 9999999
MAX_DENSITY = 25.0
