"""
Services Package

Business logic modules for the costing application.
"""

from .parsing import (
    float_to_fraction,
    normalize_fractions,
    parse_quantity,
    safe_float,
    safe_int,
    format_money,
)

from .units import (
    BaseQuantity,
    normalize_unit,
    is_known_unit,
    base_unit_for,
    to_base,
    from_base,
    convert_between_units,
    parse_pack_size,
)

from .density import (
    normalize_ingredient_name,
    get_ingredient_density,
    get_ingredient_density_or_default,
    get_average_weight,
)

from .cost import (
    BatchPriceTier,
    PackPricing,
    CostResult,
    select_batch_tier,
    compute_ingredient_usage_cost,
    compute_ingredient_cost,
    ingredient_pricing_from_record,
)

from .recipe_cost import (
    RecipeLine,
    LineCost,
    RecipeCostSummary,
    scale_factor,
    cost_line,
    food_cost_percentage,
    margin_percentage,
    markup_percentage,
    health_band,
    suggest_sell_price,
    price_for_food_cost,
    collect_allergens,
    compute_recipe_cost,
    format_cost_breakdown,
)

from .recipes import (
    recipe_lines,
    summarize_recipe,
)

__all__ = [
    # Parsing
    'float_to_fraction',
    'normalize_fractions',
    'parse_quantity',
    'safe_float',
    'safe_int',
    'format_money',
    # Units
    'BaseQuantity',
    'normalize_unit',
    'is_known_unit',
    'base_unit_for',
    'to_base',
    'from_base',
    'convert_between_units',
    'parse_pack_size',
    # Density
    'normalize_ingredient_name',
    'get_ingredient_density',
    'get_ingredient_density_or_default',
    'get_average_weight',
    # Cost
    'BatchPriceTier',
    'PackPricing',
    'CostResult',
    'select_batch_tier',
    'compute_ingredient_usage_cost',
    'compute_ingredient_cost',
    'ingredient_pricing_from_record',
    # Recipe cost
    'RecipeLine',
    'LineCost',
    'RecipeCostSummary',
    'scale_factor',
    'cost_line',
    'food_cost_percentage',
    'margin_percentage',
    'markup_percentage',
    'health_band',
    'suggest_sell_price',
    'price_for_food_cost',
    'collect_allergens',
    'compute_recipe_cost',
    'format_cost_breakdown',
    # Stored recipes
    'recipe_lines',
    'summarize_recipe',
]
