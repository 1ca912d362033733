"""
Recipe Cost Service

Rolls per-ingredient costs up into recipe totals and derives the pricing
metrics shown next to a recipe: cost per serving, profit, margin, markup and
food-cost percentage with its health band.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from constants import (
    RECIPE_BATCH, RECIPE_SINGLE, FOOD_COST_BANDS, FOOD_COST_BAND_OVER,
    NOT_AVAILABLE, PERCENT_PRECISION, DEFAULT_MARKUP_MULTIPLIER, INVALID_NUMBER,
)
from .cost import CostResult, PackPricing, compute_ingredient_cost
from .parsing import format_money, float_to_fraction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecipeLine:
    """
    One line of a recipe.

    Ingredient lines carry the ingredient's PackPricing (None when the
    ingredient has no pricing data). Sub-recipe lines carry unit_cost, the
    cost of one yield unit of the sub-recipe, and quantity counts yield
    units. A line can also be created already unknown by giving a reason.
    """

    quantity: float
    unit: str
    pricing: Optional[PackPricing] = None
    label: str = ''
    unit_cost: Optional[float] = None
    partial: bool = False
    reason: Optional[str] = None
    allergens: str = ''


@dataclass(frozen=True)
class LineCost:
    line: RecipeLine
    scaled_quantity: float
    result: CostResult


@dataclass(frozen=True)
class RecipeCostSummary:
    """Aggregated costs and pricing metrics for a recipe at a serving count."""

    lines: Tuple[LineCost, ...]
    base_servings: float
    target_servings: float
    scale_factor: float
    recipe_type: str
    effective_units: float
    total_cost: float
    cost_per_serving: Optional[float]
    sell_price: Optional[float]
    profit: Optional[float]
    margin_pct: Optional[float]
    food_cost_pct: Optional[float]
    markup_pct: Optional[float]
    health_band: str
    allergens: Tuple[str, ...] = ()

    @property
    def unknown_lines(self):
        return tuple(lc for lc in self.lines if not lc.result.is_known)

    @property
    def is_complete(self):
        """False when any line's cost is unknown, so total_cost is a lower bound."""
        return not self.unknown_lines

    def to_dict(self):
        def _r(value, digits=4):
            return None if value is None else round(value, digits)

        return {
            'lines': [
                {
                    'label': lc.line.label,
                    'quantity': _r(lc.scaled_quantity),
                    'unit': lc.line.unit,
                    **lc.result.to_dict(),
                }
                for lc in self.lines
            ],
            'base_servings': self.base_servings,
            'target_servings': self.target_servings,
            'scale_factor': _r(self.scale_factor, 6),
            'recipe_type': self.recipe_type,
            'effective_units': self.effective_units,
            'total_cost': _r(self.total_cost),
            'cost_per_serving': _r(self.cost_per_serving),
            'sell_price': self.sell_price,
            'profit': _r(self.profit),
            'margin_pct': _r(self.margin_pct, 2),
            'food_cost_pct': _r(self.food_cost_pct, 2),
            'markup_pct': _r(self.markup_pct, 2),
            'health_band': self.health_band,
            'allergens': list(self.allergens),
            'is_complete': self.is_complete,
            'unknown_count': len(self.unknown_lines),
        }


def _positive(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) \
        and math.isfinite(value) and value > 0


def scale_factor(base_servings, target_servings=None):
    """Return target_servings / base_servings; an unusable base counts as 1 serving."""
    if not _positive(base_servings):
        logger.warning("Invalid base servings %r, using 1", base_servings)
        base_servings = 1
    if target_servings is None:
        return 1.0
    if not isinstance(target_servings, (int, float)) or not math.isfinite(target_servings) \
            or target_servings < 0:
        logger.warning("Invalid target servings %r, using base", target_servings)
        return 1.0
    return target_servings / base_servings


def cost_line(line, factor=1.0):
    """Cost a single RecipeLine after scaling its quantity by factor."""
    quantity = line.quantity
    if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
        quantity = quantity * factor

    if line.reason is not None:
        return LineCost(line, quantity, CostResult.unknown(line.reason))

    if line.unit_cost is not None:
        if quantity is None or quantity == 0:
            return LineCost(line, 0.0, CostResult.computed(0.0))
        cost = quantity * line.unit_cost
        if not math.isfinite(cost) or cost < 0:
            return LineCost(line, quantity, CostResult.unknown(INVALID_NUMBER))
        return LineCost(line, quantity, CostResult.computed(cost, approximate=line.partial))

    return LineCost(line, quantity, compute_ingredient_cost(quantity, line.unit, line.pricing))


def food_cost_percentage(cost_per_serving, sell_price):
    """Cost as a percentage of sell price, or None when there is no usable sell price."""
    if cost_per_serving is None or not _positive(sell_price):
        return None
    return cost_per_serving / sell_price * 100


def margin_percentage(cost_per_serving, sell_price):
    if cost_per_serving is None or not _positive(sell_price):
        return None
    return (sell_price - cost_per_serving) / sell_price * 100


def markup_percentage(cost_per_serving, sell_price):
    if sell_price is None or not _positive(cost_per_serving):
        return None
    return (sell_price - cost_per_serving) / cost_per_serving * 100


def health_band(food_cost_pct):
    """
    Classify a food-cost percentage.

    Upper bounds are inclusive: 25% is Excellent, 33% Good, 40% Fair,
    anything above is Too High. None gives 'N/A'.
    """
    if food_cost_pct is None:
        return NOT_AVAILABLE
    pct = round(food_cost_pct, PERCENT_PRECISION)
    for upper, label in FOOD_COST_BANDS:
        if pct <= upper:
            return label
    return FOOD_COST_BAND_OVER


def suggest_sell_price(cost_per_serving, multiplier=DEFAULT_MARKUP_MULTIPLIER):
    """Default sell price: cost per serving times a markup multiplier."""
    if cost_per_serving is None or not _positive(multiplier):
        return None
    return cost_per_serving * multiplier


def price_for_food_cost(cost_per_serving, target_pct):
    """Sell price at which cost_per_serving is target_pct percent of the price."""
    if cost_per_serving is None or not _positive(target_pct):
        return None
    return cost_per_serving / (target_pct / 100)


def collect_allergens(lines):
    """Sorted union of the comma-separated allergens of every line (first spelling kept)."""
    found = {}
    for line in lines:
        text = line.allergens or (line.pricing.allergens if line.pricing is not None else '')
        for allergen in (text or '').split(','):
            allergen = allergen.strip()
            if allergen:
                found.setdefault(allergen.lower(), allergen)
    return tuple(found[key] for key in sorted(found))


def compute_recipe_cost(lines, base_servings, target_servings=None, sell_price=None,
                        recipe_type=RECIPE_BATCH, slices_per_batch=None):
    """
    Cost a recipe at a target serving count.

    Every line quantity is scaled by target_servings / base_servings before
    costing. Lines whose cost is unknown add nothing to the total and are
    listed by RecipeCostSummary.unknown_lines.

    Cost per serving divides the total by the number of units sold: the
    target servings for a single recipe, or slices_per_batch scaled by the
    number of batches (defaulting to the target servings) for a batch recipe.

    Args:
        lines: Iterable of RecipeLine
        base_servings: Servings the recipe quantities are written for
        target_servings: Servings to cost for (defaults to base_servings)
        sell_price: Price of one serving, optional
        recipe_type: 'single' or 'batch'
        slices_per_batch: Units cut from one batch

    Returns:
        RecipeCostSummary
    """
    lines = tuple(lines)
    if not _positive(base_servings):
        logger.warning("Invalid base servings %r, using 1", base_servings)
        base_servings = 1
    if target_servings is None:
        target_servings = base_servings
    factor = scale_factor(base_servings, target_servings)

    line_costs = tuple(cost_line(line, factor) for line in lines)
    total = math.fsum(lc.result.amount for lc in line_costs if lc.result.is_known)

    if recipe_type == RECIPE_SINGLE:
        units = target_servings
    else:
        # slices_per_batch counts slices from one base batch
        units = slices_per_batch * factor if _positive(slices_per_batch) else target_servings
    cost_per_serving = total / units if _positive(units) else None

    if not _positive(sell_price) and sell_price != 0:
        sell_price = None
    food_cost = food_cost_percentage(cost_per_serving, sell_price)
    profit = None
    if cost_per_serving is not None and sell_price is not None:
        profit = sell_price - cost_per_serving

    summary = RecipeCostSummary(
        lines=line_costs,
        base_servings=base_servings,
        target_servings=target_servings,
        scale_factor=factor,
        recipe_type=recipe_type,
        effective_units=units,
        total_cost=total,
        cost_per_serving=cost_per_serving,
        sell_price=sell_price,
        profit=profit,
        margin_pct=margin_percentage(cost_per_serving, sell_price),
        food_cost_pct=food_cost,
        markup_pct=markup_percentage(cost_per_serving, sell_price),
        health_band=health_band(food_cost),
        allergens=collect_allergens(lines),
    )
    logger.debug("Recipe cost total=%.4f per_serving=%s band=%s",
                 total, cost_per_serving, summary.health_band)
    return summary


def format_cost_breakdown(summary, currency_symbol='£'):
    """Render a RecipeCostSummary as plain text."""
    def money(value):
        return format_money(value, currency_symbol)

    out = [f"Total Recipe Cost: {money(summary.total_cost)}"]
    if not summary.is_complete:
        out[0] += f" (incomplete: {len(summary.unknown_lines)} item(s) without pricing)"
    out.append(f"Cost per serving: {money(summary.cost_per_serving)}")
    if summary.sell_price is not None:
        out.append(f"Sell price: {money(summary.sell_price)}")
        pct = summary.food_cost_pct
        out.append(f"Food cost: {'N/A' if pct is None else f'{pct:.1f}%'} ({summary.health_band})")
    out.append('')
    out.append('Ingredient Costs:')
    for lc in summary.lines:
        label = lc.line.label or 'Unknown'
        qty = float_to_fraction(lc.scaled_quantity) if isinstance(lc.scaled_quantity, (int, float)) \
            else lc.scaled_quantity
        if lc.result.is_known:
            cost = money(lc.result.amount)
            if lc.result.approximate:
                cost = '~' + cost
        else:
            cost = lc.result.message
        out.append(f"  - {label}: {qty} {lc.line.unit} = {cost}")
    if summary.allergens:
        out.append('')
        out.append('Allergens: ' + ', '.join(summary.allergens))
    return '\n'.join(out) + '\n'
