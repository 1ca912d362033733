"""
Recipe Loading Service

Turns stored Recipe / RecipeItem / Ingredient rows into costing inputs.
Sub-recipes are costed recursively; a sub-recipe that leads back to a
recipe already being costed becomes an unknown line instead of recursing
forever.
"""

import logging

from constants import NO_PRICING_DATA, SUB_RECIPE_CYCLE
from .cost import ingredient_pricing_from_record
from .recipe_cost import RecipeLine, compute_recipe_cost

logger = logging.getLogger(__name__)


def _sub_recipe_line(item, recipe, stack):
    sub = item.sub_recipe
    if sub is None or sub.company_id != recipe.company_id:
        return RecipeLine(item.quantity, item.unit, label='Missing sub-recipe', reason=NO_PRICING_DATA)
    if sub.id in stack:
        logger.warning("Sub-recipe cycle: recipe %s -> %s", recipe.id, sub.id)
        return RecipeLine(item.quantity, item.unit, label=sub.name, reason=SUB_RECIPE_CYCLE)

    sub_summary = summarize_recipe(sub, _stack=stack)
    yield_units = sub.base_servings if sub.base_servings and sub.base_servings > 0 else 1
    return RecipeLine(
        item.quantity, item.unit,
        label=sub.name,
        unit_cost=sub_summary.total_cost / yield_units,
        partial=not sub_summary.is_complete,
        allergens=', '.join(sub_summary.allergens),
    )


def recipe_lines(recipe, _stack=frozenset()):
    """Build the RecipeLine list for a Recipe row."""
    stack = _stack | {recipe.id}
    lines = []
    for item in recipe.items:
        if item.sub_recipe_id is not None:
            lines.append(_sub_recipe_line(item, recipe, stack))
            continue

        ingredient = item.ingredient
        if ingredient is None or ingredient.company_id != recipe.company_id:
            # Deleted or foreign ingredient: no pricing data
            lines.append(RecipeLine(item.quantity, item.unit, label='Missing ingredient'))
            continue

        lines.append(RecipeLine(
            item.quantity, item.unit,
            pricing=ingredient_pricing_from_record(ingredient),
            label=ingredient.name,
        ))
    return lines


def summarize_recipe(recipe, target_servings=None, sell_price=None, _stack=frozenset()):
    """
    Cost a stored recipe.

    Args:
        recipe: Recipe row with items loaded
        target_servings: Servings to cost for (defaults to the recipe's base)
        sell_price: Overrides the stored sell price when given

    Returns:
        RecipeCostSummary
    """
    return compute_recipe_cost(
        recipe_lines(recipe, _stack),
        recipe.base_servings,
        target_servings=target_servings,
        sell_price=recipe.sell_price if sell_price is None else sell_price,
        recipe_type=recipe.recipe_type,
        slices_per_batch=recipe.slices_per_batch,
    )
