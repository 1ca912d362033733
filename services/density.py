"""
Density Service

Normalizes ingredient names and resolves the grams-per-millilitre density
used to cross-convert between volume and weight.

Matching policy (used by every caller):
1. Normalize the name: lowercase, punctuation to spaces, stop words removed,
   simple plurals folded.
2. Exact match against the table.
3. Otherwise a table key is a candidate when all its words appear as whole
   words in the name and its last word is the name's head noun (the last
   word that is not a size like "2l"). "Strong bread flour" matches "bread
   flour"; "milk chocolate" matches nothing. The key with the most words
   wins. If several keys tie and disagree on density the match is ambiguous
   and nothing is returned.
"""

import logging
import math
import re

from constants import (
    INGREDIENT_DENSITIES, AVERAGE_WEIGHTS,
    NAME_STOP_WORDS, NO_STRIP_S, SINGULAR_MAP,
)

logger = logging.getLogger(__name__)


def _singular(word):
    if word in SINGULAR_MAP:
        return SINGULAR_MAP[word]
    if word.endswith('s') and not word.endswith('ss') and len(word) > 3 and word not in NO_STRIP_S:
        return word[:-1]
    return word


def normalize_ingredient_name(name):
    """Normalize an ingredient name for table lookup ('Plain Flour (sifted)' -> 'plain flour')."""
    if not name or not isinstance(name, str):
        return ''
    normalized = name.lower()
    # Drop bracketed notes, then turn punctuation into spaces
    normalized = re.sub(r'\([^)]*\)', ' ', normalized)
    normalized = re.sub(r'[^a-z0-9 ]+', ' ', normalized)
    words = [_singular(w) for w in normalized.split() if w not in NAME_STOP_WORDS]
    return ' '.join(words)


# Normalized once at import; the source tables are already keyed this way
_DENSITY_KEYS = {
    normalize_ingredient_name(key): value for key, value in INGREDIENT_DENSITIES.items()
}
_WEIGHT_KEYS = {
    normalize_ingredient_name(key): value for key, value in AVERAGE_WEIGHTS.items()
}


def _match_table(name, table):
    normalized = normalize_ingredient_name(name)
    if not normalized:
        return None
    if normalized in table:
        return table[normalized]

    words = [w for w in normalized.split() if not any(c.isdigit() for c in w)]
    if not words:
        return None
    name_words = set(words)
    head = words[-1]
    best_size = 0
    best_values = set()
    for key, value in table.items():
        key_words = key.split()
        if key_words[-1] != head or not set(key_words) <= name_words:
            continue
        if len(key_words) > best_size:
            best_size = len(key_words)
            best_values = {value}
        elif len(key_words) == best_size:
            best_values.add(value)

    if len(best_values) == 1:
        return best_values.pop()
    if best_values:
        logger.debug("Ambiguous table match for %r: %s", name, sorted(best_values))
    return None


def get_ingredient_density(name):
    """Look up a built-in density for an ingredient name, or None."""
    return _match_table(name, _DENSITY_KEYS)


def is_valid_density(density):
    return isinstance(density, (int, float)) and not isinstance(density, bool) \
        and math.isfinite(density) and density > 0


def get_ingredient_density_or_default(name, density=None):
    """
    Return the density to use for an ingredient.

    A positive user-supplied density wins; otherwise the built-in table is
    consulted. None means no volume/weight cross-conversion is possible.
    """
    if is_valid_density(density):
        return float(density)
    return get_ingredient_density(name)


def get_average_weight(name):
    """Look up the average weight in grams of one piece of an ingredient, or None."""
    return _match_table(name, _WEIGHT_KEYS)
