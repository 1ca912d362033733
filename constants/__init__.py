"""
Constants Package

Static lookup tables and policy values shared by the services.
"""

from .units import (
    GRAMS,
    MILLILITRES,
    BASE_UNITS,
    UNIT_MAPPINGS,
    WEIGHT_TO_G,
    VOLUME_TO_ML,
    COUNT_TO_G,
    WEIGHT_UNITS,
    VOLUME_UNITS,
    COUNT_UNITS,
    PIECE_UNITS,
    ALL_UNITS,
    UNIT_BASE,
    COMMON_FRACTIONS,
    UNICODE_FRACTIONS,
)

from .ingredients import (
    INGREDIENT_DENSITIES,
    AVERAGE_WEIGHTS,
    NAME_STOP_WORDS,
    NO_STRIP_S,
    SINGULAR_MAP,
)

from .costing import (
    NO_PRICING_DATA,
    NO_PACK_PRICE,
    INVALID_PACK_QUANTITY,
    UNKNOWN_UNIT,
    CANNOT_CONVERT,
    INVALID_NUMBER,
    SUB_RECIPE_CYCLE,
    REASON_MESSAGES,
    RECIPE_SINGLE,
    RECIPE_BATCH,
    FOOD_COST_BANDS,
    FOOD_COST_BAND_OVER,
    NOT_AVAILABLE,
    PERCENT_PRECISION,
    MARKUP_MULTIPLIERS,
    DEFAULT_MARKUP_MULTIPLIER,
)

from .validation import (
    VALID_UNITS,
    VALID_PACK_UNITS,
    VALID_RECIPE_TYPES,
    MAX_LENGTHS,
    MAX_PRICE,
    MAX_QUANTITY,
    MAX_DENSITY,
)
