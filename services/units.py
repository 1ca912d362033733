"""
Unit Conversion Service

Functions for normalizing recipe and pack quantities to a base unit
(grams or millilitres) and converting between units.
"""

import logging
import math
import re
from collections import namedtuple

from constants import (
    UNIT_MAPPINGS, WEIGHT_TO_G, VOLUME_TO_ML, COUNT_TO_G,
    COUNT_UNITS, PIECE_UNITS, UNIT_BASE, GRAMS, MILLILITRES,
)

logger = logging.getLogger(__name__)

# amount is always >= 0, unit is 'g' or 'ml'.
# approximate is True when a count/size heuristic produced the grams.
BaseQuantity = namedtuple('BaseQuantity', ['amount', 'unit', 'approximate'])

PACK_SIZE_PATTERN = re.compile(
    r'^(?:(?P<count>\d+(?:\.\d+)?)\s*[x×*]\s*)?(?P<size>\d+(?:\.\d+)?)\s*(?P<unit>[a-z][a-z\- ]*)$'
)


def _is_valid_amount(amount):
    return isinstance(amount, (int, float)) and not isinstance(amount, bool) \
        and math.isfinite(amount) and amount >= 0


def normalize_unit(unit):
    """Map a free-text unit ('Tablespoons', 'fl oz', 'G') to its canonical tag, or None."""
    if not unit or not isinstance(unit, str):
        return None
    key = ' '.join(unit.lower().strip().rstrip('.').split())
    return UNIT_MAPPINGS.get(key)


def is_known_unit(unit):
    return normalize_unit(unit) is not None


def base_unit_for(unit):
    """Return 'g' or 'ml' for a unit, or None if the unit is not recognised."""
    canonical = normalize_unit(unit)
    if canonical is None:
        return None
    return UNIT_BASE[canonical]


def _count_weight(unit, piece_weight_g):
    if unit in PIECE_UNITS and piece_weight_g and piece_weight_g > 0:
        return piece_weight_g
    return COUNT_TO_G[unit]


def to_base(amount, unit, piece_weight_g=None):
    """
    Normalize a quantity to grams or millilitres.

    Mass units convert to grams and volume units to millilitres using fixed
    factors. Count, size and informal units (each, slice, large, pinch...)
    have no physical conversion; they are estimated in grams from a default
    weight, or from piece_weight_g for 'each'/'slice' when it is known.
    Those results are marked approximate.

    Args:
        amount: Non-negative quantity
        unit: Unit string, any alias accepted by normalize_unit
        piece_weight_g: Optional weight of one piece of this ingredient

    Returns:
        BaseQuantity, or None if the unit is unrecognised or the amount is
        negative or not a finite number
    """
    canonical = normalize_unit(unit)
    if canonical is None:
        logger.warning("Unrecognised unit %r", unit)
        return None
    if not _is_valid_amount(amount):
        logger.warning("Invalid amount %r for unit %r", amount, unit)
        return None

    if canonical in WEIGHT_TO_G:
        return BaseQuantity(amount * WEIGHT_TO_G[canonical], GRAMS, False)
    if canonical in VOLUME_TO_ML:
        return BaseQuantity(amount * VOLUME_TO_ML[canonical], MILLILITRES, False)
    return BaseQuantity(amount * _count_weight(canonical, piece_weight_g), GRAMS, True)


def from_base(amount, unit, piece_weight_g=None):
    """
    Express an amount of the unit's base (grams or millilitres) in that unit.

    Returns None if the unit is unrecognised.
    """
    canonical = normalize_unit(unit)
    if canonical is None or not _is_valid_amount(amount):
        return None
    if canonical in WEIGHT_TO_G:
        return amount / WEIGHT_TO_G[canonical]
    if canonical in VOLUME_TO_ML:
        return amount / VOLUME_TO_ML[canonical]
    return amount / _count_weight(canonical, piece_weight_g)


def convert_between_units(quantity, from_unit, to_unit, density=None, piece_weight_g=None):
    """
    Convert a quantity from one unit to another.

    Weight-to-weight and volume-to-volume conversions always work. Weight to
    volume (or back) needs a density in g/ml; without one the result is None.
    """
    source = to_base(quantity, from_unit, piece_weight_g)
    target_base = base_unit_for(to_unit)
    if source is None or target_base is None:
        return None

    amount = source.amount
    if source.unit != target_base:
        if not density or not math.isfinite(density) or density <= 0:
            return None
        if source.unit == MILLILITRES:
            amount = amount * density
        else:
            amount = amount / density

    return from_base(amount, to_unit, piece_weight_g)


def parse_pack_size(text):
    """
    Parse a pack description into a BaseQuantity.

    Handles plain sizes ("2kg", "500 ml") and multipacks ("6x12L",
    "12 x 500ml"). Returns None when the text cannot be read.
    """
    if not text or not isinstance(text, str):
        return None

    match = PACK_SIZE_PATTERN.match(' '.join(text.lower().split()))
    if not match:
        return None

    count = float(match.group('count')) if match.group('count') else 1.0
    size = float(match.group('size'))
    unit = match.group('unit').strip()
    if normalize_unit(unit) in COUNT_UNITS:
        return None

    return to_base(count * size, unit)
