"""
Cost Calculation Service

Functions for calculating what a quantity of an ingredient costs given the
pack it is bought in.

Costs are returned as CostResult values. A result is either computed (an
amount, possibly exactly zero) or unknown, with a reason code the caller can
show ("No pack price set", "Cannot convert..."). Unknown results carry an
amount of 0.0 so they can be summed safely, but they must not be displayed
as a real zero cost.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from constants import (
    GRAMS, MILLILITRES, REASON_MESSAGES,
    NO_PRICING_DATA, NO_PACK_PRICE, INVALID_PACK_QUANTITY,
    UNKNOWN_UNIT, CANNOT_CONVERT, INVALID_NUMBER,
)
from .density import get_ingredient_density_or_default, get_average_weight, is_valid_density
from .units import to_base, normalize_unit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchPriceTier:
    """An alternative pack size and price, in the pack's unit."""

    pack_quantity: float
    pack_price: float


@dataclass(frozen=True)
class PackPricing:
    """How an ingredient is bought: price for a pack of pack_quantity pack_unit."""

    pack_price: Optional[float]
    pack_quantity: Optional[float]
    pack_unit: str = GRAMS
    name: str = ''
    density: Optional[float] = None
    piece_weight_g: Optional[float] = None
    batch_pricing: Tuple[BatchPriceTier, ...] = ()
    allergens: str = ''


@dataclass(frozen=True)
class CostResult:
    """Cost of one ingredient usage: computed amount, or unknown with a reason."""

    amount: float = 0.0
    reason: Optional[str] = None
    approximate: bool = False
    tier: Optional[BatchPriceTier] = field(default=None, compare=False)

    @classmethod
    def computed(cls, amount, approximate=False, tier=None):
        return cls(amount=amount, approximate=approximate, tier=tier)

    @classmethod
    def unknown(cls, reason):
        return cls(amount=0.0, reason=reason)

    @property
    def is_known(self):
        return self.reason is None

    @property
    def message(self):
        if self.reason is None:
            return None
        return REASON_MESSAGES.get(self.reason, self.reason)

    def to_dict(self):
        data = {
            'cost': round(self.amount, 4) if self.is_known else None,
            'known': self.is_known,
            'reason': self.reason,
            'message': self.message,
            'approximate': self.approximate,
        }
        if self.tier is not None:
            data['tier'] = {
                'pack_quantity': self.tier.pack_quantity,
                'pack_price': self.tier.pack_price,
            }
        return data


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def coerce_tier(tier):
    """Build a BatchPriceTier from a tier, a (quantity, price) pair or a dict."""
    if isinstance(tier, BatchPriceTier):
        return tier
    try:
        if isinstance(tier, dict):
            quantity = tier.get('pack_quantity', tier.get('packQuantity'))
            price = tier.get('pack_price', tier.get('packPrice'))
        else:
            quantity, price = tier
        return BatchPriceTier(float(quantity), float(price))
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed batch price tier %r", tier)
        return None


def select_batch_tier(required_quantity, pack_quantity, pack_price, batch_pricing):
    """
    Choose which pack size to price a usage against.

    The standard pack and every valid tier are candidates. The smallest
    candidate that covers required_quantity wins; if none covers it the
    largest wins. Equal sizes are broken by the lower unit price. Tiers with
    a non-positive quantity or a negative price are skipped.

    All quantities must be in the same unit.

    Returns:
        (pack_quantity, pack_price, tier) where tier is None when the
        standard pack was chosen
    """
    candidates = [(pack_quantity, pack_price, None)]
    for raw in batch_pricing or ():
        tier = coerce_tier(raw)
        if tier is None:
            continue
        if not (_is_number(tier.pack_quantity) and _is_number(tier.pack_price)) \
                or tier.pack_quantity <= 0 or tier.pack_price < 0:
            logger.warning("Skipping invalid batch price tier %r", tier)
            continue
        candidates.append((tier.pack_quantity, tier.pack_price, tier))

    def unit_price(candidate):
        return candidate[1] / candidate[0]

    covering = [c for c in candidates if c[0] >= required_quantity]
    if covering:
        return min(covering, key=lambda c: (c[0], unit_price(c)))
    return max(candidates, key=lambda c: (c[0], -unit_price(c)))


def compute_ingredient_usage_cost(recipe_quantity, recipe_unit, pack_price, pack_quantity,
                                  pack_unit, density=None, batch_pricing=None, piece_weight_g=None):
    """
    Calculate the cost of using recipe_quantity recipe_unit of an ingredient.

    The recipe quantity is normalized to grams or millilitres without density.
    When the pack is in the same base unit the cost is a straight ratio.
    When one side is weight and the other volume the pack is converted with
    the density (g/ml); with no density the cost cannot be computed.

    Args:
        recipe_quantity: Amount used in the recipe
        recipe_unit: Unit of the recipe amount
        pack_price: Price of one pack
        pack_quantity: Size of the pack in pack_unit
        pack_unit: Unit of the pack, normally 'g' or 'ml'
        density: Optional grams per millilitre
        batch_pricing: Optional iterable of BatchPriceTier (or pairs/dicts)
            in pack_unit
        piece_weight_g: Optional weight of one piece, for 'each'/'slice'

    Returns:
        CostResult
    """
    if recipe_quantity is None or recipe_quantity == 0:
        return CostResult.computed(0.0)
    if not _is_number(recipe_quantity) or recipe_quantity < 0:
        logger.warning("Invalid recipe quantity %r", recipe_quantity)
        return CostResult.unknown(INVALID_NUMBER)

    if pack_price is None or pack_quantity is None:
        return CostResult.unknown(NO_PACK_PRICE)
    if not _is_number(pack_quantity) or not _is_number(pack_price) or pack_price < 0:
        logger.warning("Invalid pack data: price=%r quantity=%r", pack_price, pack_quantity)
        return CostResult.unknown(INVALID_NUMBER)
    if pack_quantity <= 0:
        return CostResult.unknown(INVALID_PACK_QUANTITY)

    recipe_base = to_base(recipe_quantity, recipe_unit, piece_weight_g)
    pack_base = to_base(1, pack_unit, piece_weight_g)
    if recipe_base is None or pack_base is None:
        return CostResult.unknown(UNKNOWN_UNIT)

    # Pack sizes (standard and tiers) are all in pack_unit; one pack_unit is
    # pack_factor grams or millilitres
    pack_factor = pack_base.amount

    if not is_valid_density(density):
        density = None

    if recipe_base.unit == pack_base.unit:
        required = recipe_base.amount
    elif density is None:
        logger.debug("No density to convert %s to %s", recipe_base.unit, pack_base.unit)
        return CostResult.unknown(CANNOT_CONVERT)
    elif recipe_base.unit == MILLILITRES:
        required = recipe_base.amount * density
    else:
        required = recipe_base.amount / density

    chosen_quantity, price, tier = select_batch_tier(
        required / pack_factor, pack_quantity, pack_price, batch_pricing,
    )
    quantity_base = chosen_quantity * pack_factor

    if recipe_base.unit == pack_base.unit:
        cost = recipe_base.amount * (price / quantity_base)
    elif recipe_base.unit == MILLILITRES:
        # Recipe is volume, pack is weight: express the pack as volume
        pack_volume_ml = quantity_base / density
        cost = recipe_base.amount * (price / pack_volume_ml)
    else:
        # Recipe is weight, pack is volume: express the pack as weight
        pack_weight_g = quantity_base * density
        cost = recipe_base.amount * (price / pack_weight_g)

    if not math.isfinite(cost) or cost < 0:
        logger.warning("Non-finite cost %r for %r %r", cost, recipe_quantity, recipe_unit)
        return CostResult.unknown(INVALID_NUMBER)

    approximate = (recipe_base.approximate or pack_base.approximate) \
        and normalize_unit(recipe_unit) != normalize_unit(pack_unit)
    return CostResult.computed(cost, approximate=approximate, tier=tier)


def compute_ingredient_cost(quantity, unit, pricing):
    """
    Calculate the cost of a recipe line against an ingredient's PackPricing.

    The density is resolved by name when the ingredient has none of its own.
    A missing ingredient yields an unknown 'no_pricing_data' result, except
    that a zero quantity always costs exactly 0.
    """
    if quantity is None or quantity == 0:
        return CostResult.computed(0.0)
    if pricing is None:
        return CostResult.unknown(NO_PRICING_DATA)

    density = get_ingredient_density_or_default(pricing.name, pricing.density)
    piece_weight = pricing.piece_weight_g or get_average_weight(pricing.name)
    return compute_ingredient_usage_cost(
        quantity, unit,
        pricing.pack_price, pricing.pack_quantity, pricing.pack_unit,
        density=density,
        batch_pricing=pricing.batch_pricing,
        piece_weight_g=piece_weight,
    )


def ingredient_pricing_from_record(record):
    """
    Build a PackPricing from an ingredient record (ORM row or similar).

    Reads name, pack_price, pack_quantity, pack_unit, density_g_per_ml,
    piece_weight_g, allergens and batch_tiers when present.
    """
    if record is None:
        return None
    tiers = tuple(
        BatchPriceTier(tier.pack_quantity, tier.pack_price)
        for tier in (getattr(record, 'batch_tiers', None) or ())
    )
    return PackPricing(
        pack_price=getattr(record, 'pack_price', None),
        pack_quantity=getattr(record, 'pack_quantity', None),
        pack_unit=getattr(record, 'pack_unit', None) or GRAMS,
        name=getattr(record, 'name', '') or '',
        density=getattr(record, 'density_g_per_ml', None),
        piece_weight_g=getattr(record, 'piece_weight_g', None),
        batch_pricing=tiers,
        allergens=getattr(record, 'allergens', '') or '',
    )
