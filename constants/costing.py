"""
Costing Constants

Reason codes for costs that could not be computed, recipe types, and the
food-cost policy thresholds.
"""

# Reasons a cost is unknown (CostResult.reason)
NO_PRICING_DATA = 'no_pricing_data'
NO_PACK_PRICE = 'no_pack_price'
INVALID_PACK_QUANTITY = 'invalid_pack_quantity'
UNKNOWN_UNIT = 'unknown_unit'
CANNOT_CONVERT = 'cannot_convert'
INVALID_NUMBER = 'invalid_number'
SUB_RECIPE_CYCLE = 'sub_recipe_cycle'

# Human readable messages for each reason
REASON_MESSAGES = {
    NO_PRICING_DATA: 'No pricing data',
    NO_PACK_PRICE: 'No pack price set',
    INVALID_PACK_QUANTITY: 'Pack quantity must be greater than zero',
    UNKNOWN_UNIT: 'Unrecognised unit',
    CANNOT_CONVERT: 'Cannot convert between weight and volume without a density',
    INVALID_NUMBER: 'Data issue: invalid number',
    SUB_RECIPE_CYCLE: 'Sub-recipe refers back to itself',
}

# Recipe types
RECIPE_SINGLE = 'single'
RECIPE_BATCH = 'batch'

# Food cost % health bands (inclusive upper bound, label), checked in order
FOOD_COST_BANDS = (
    (25, 'Excellent'),
    (33, 'Good'),
    (40, 'Fair'),
)
FOOD_COST_BAND_OVER = 'Too High'
NOT_AVAILABLE = 'N/A'

# Precision used before comparing percentages against the bands
PERCENT_PRECISION = 6

# Quick sell price multipliers offered next to the pricing calculator
MARKUP_MULTIPLIERS = (2, 2.5, 3, 4)
DEFAULT_MARKUP_MULTIPLIER = 3.0
