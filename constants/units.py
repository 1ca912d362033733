"""
Unit Constants and Conversion Tables

Contains all unit mappings, conversion factors, and related constants
for quantity normalization and cost calculations.
"""

from types import MappingProxyType

# Canonical base units
GRAMS = 'g'
MILLILITRES = 'ml'
BASE_UNITS = frozenset({GRAMS, MILLILITRES})

# Unit aliases (lowercase input -> canonical unit)
UNIT_MAPPINGS = MappingProxyType({
    # Mass
    'g': 'g', 'gram': 'g', 'grams': 'g', 'gr': 'g',
    'kg': 'kg', 'kilogram': 'kg', 'kilograms': 'kg', 'kilo': 'kg', 'kilos': 'kg',
    'mg': 'mg', 'milligram': 'mg', 'milligrams': 'mg',
    'oz': 'oz', 'ounce': 'oz', 'ounces': 'oz',
    'lb': 'lb', 'lbs': 'lb', 'pound': 'lb', 'pounds': 'lb',
    # Volume
    'ml': 'ml', 'millilitre': 'ml', 'millilitres': 'ml', 'milliliter': 'ml', 'milliliters': 'ml',
    'l': 'l', 'litre': 'l', 'litres': 'l', 'liter': 'l', 'liters': 'l',
    'fl-oz': 'fl-oz', 'fl oz': 'fl-oz', 'floz': 'fl-oz', 'fluid ounce': 'fl-oz', 'fluid ounces': 'fl-oz',
    'tbsp': 'tbsp', 'tbs': 'tbsp', 'tablespoon': 'tbsp', 'tablespoons': 'tbsp',
    'tsp': 'tsp', 'teaspoon': 'tsp', 'teaspoons': 'tsp',
    'cup': 'cup', 'cups': 'cup',
    'pint': 'pint', 'pints': 'pint',
    'quart': 'quart', 'quarts': 'quart',
    'gallon': 'gallon', 'gallons': 'gallon',
    # Count
    'each': 'each', 'ea': 'each', 'piece': 'each', 'pieces': 'each', 'pc': 'each', 'pcs': 'each',
    'slice': 'slice', 'slices': 'slice',
    # Size
    'large': 'large', 'medium': 'medium', 'small': 'small',
    # Informal
    'pinch': 'pinch', 'pinches': 'pinch',
    'dash': 'dash', 'dashes': 'dash',
})

# Weight conversions to G
WEIGHT_TO_G = MappingProxyType({
    'g': 1,
    'kg': 1000,
    'mg': 0.001,
    'oz': 28.3495,
    'lb': 453.592,
})

# Volume conversions to ML (metric kitchen measures, UK imperial pint/quart/gallon)
VOLUME_TO_ML = MappingProxyType({
    'ml': 1,
    'l': 1000,
    'cup': 240,
    'tbsp': 15,
    'tsp': 5,
    'fl-oz': 29.5735,
    'pint': 568.26125,
    'quart': 1136.5225,
    'gallon': 4546.09,
})

# Approximate grams for units with no physical conversion.
# These are estimates so a cost can still be shown; results using them are
# flagged as approximate.
COUNT_TO_G = MappingProxyType({
    'each': 50,      # one egg-sized item
    'slice': 30,     # one slice of bread
    'large': 100,
    'medium': 60,
    'small': 30,
    'pinch': 0.5,    # about 1/8 tsp
    'dash': 0.25,    # about 1/16 tsp
})

WEIGHT_UNITS = frozenset(WEIGHT_TO_G)
VOLUME_UNITS = frozenset(VOLUME_TO_ML)
COUNT_UNITS = frozenset(COUNT_TO_G)

# Units where a per-ingredient piece weight replaces the default heuristic
PIECE_UNITS = frozenset({'each', 'slice'})

ALL_UNITS = WEIGHT_UNITS | VOLUME_UNITS | COUNT_UNITS

# Unit -> base unit it normalizes to
UNIT_BASE = MappingProxyType({
    **{unit: GRAMS for unit in WEIGHT_UNITS},
    **{unit: MILLILITRES for unit in VOLUME_UNITS},
    **{unit: GRAMS for unit in COUNT_UNITS},
})

# Common fractions for display (using precise values)
COMMON_FRACTIONS = {
    0.125: '1/8', 0.25: '1/4', 1/3: '1/3', 0.375: '3/8',
    0.5: '1/2', 0.625: '5/8', 2/3: '2/3', 0.75: '3/4', 0.875: '7/8'
}

# Unicode fraction characters mapping
UNICODE_FRACTIONS = {
    '\u00bd': 0.5,    # ½
    '\u2153': 1/3,    # ⅓
    '\u2154': 2/3,    # ⅔
    '\u00bc': 0.25,   # ¼
    '\u00be': 0.75,   # ¾
    '\u215b': 0.125,  # ⅛
    '\u215c': 0.375,  # ⅜
    '\u215d': 0.625,  # ⅝
    '\u215e': 0.875,  # ⅞
}
