import pytest

from constants import INGREDIENT_DENSITIES, CANNOT_CONVERT
from services.cost import PackPricing, compute_ingredient_cost
from services.density import (
    normalize_ingredient_name, get_ingredient_density,
    get_ingredient_density_or_default, get_average_weight,
)


def test_normalize_ingredient_name():
    assert normalize_ingredient_name('Plain Flour (sifted)') == 'plain flour'
    assert normalize_ingredient_name('  Fresh  EGGS ') == 'egg'
    assert normalize_ingredient_name('Self-raising flour') == 'self raising flour'
    assert normalize_ingredient_name('Molasses') == 'molasses'
    assert normalize_ingredient_name(None) == ''


def test_exact_match():
    assert get_ingredient_density('flour') == 0.53
    assert get_ingredient_density('Milk') == 1.03
    assert get_ingredient_density('Water') == 1.0


def test_most_specific_key_wins():
    assert get_ingredient_density('Organic Strong Bread Flour') == 0.55
    assert get_ingredient_density('Tesco Whole Milk 2L') == 1.03
    assert get_ingredient_density('Extra virgin olive oil') == 0.92


def test_whole_words_only():
    # 'butter' must not match inside 'buttermilk'
    assert get_ingredient_density('Buttermilk') == 1.03
    assert get_ingredient_density('Butternut squash') is None
    assert get_ingredient_density('Flourish') is None


def test_ambiguous_match_returns_none():
    # 'cake flour' (0.5) and 'bread flour' (0.55) tie at two words each
    assert get_ingredient_density('Bread and cake flour') is None


def test_match_must_cover_head_noun():
    assert get_ingredient_density('honey water') == 1.0
    assert get_ingredient_density('Plain flour 1.5kg') == 0.53


@pytest.mark.parametrize('name', [
    'Milk chocolate',
    'Cream of tartar',
    'Sugar snap peas',
    'Butter beans',
    'Ginger beer',
    'Egg noodles',
    'Salt beef',
])
def test_modifier_words_do_not_match(name):
    assert get_ingredient_density(name) is None


def test_unmatched_name_cannot_be_costed_by_volume():
    chocolate = PackPricing(10.0, 1000, 'g', name='Milk chocolate')
    assert compute_ingredient_cost(1, 'cup', chocolate).reason == CANNOT_CONVERT


def test_unknown_name():
    assert get_ingredient_density('xanthan gum') is None
    assert get_ingredient_density('') is None


def test_user_density_wins():
    assert get_ingredient_density_or_default('flour', 0.6) == 0.6
    assert get_ingredient_density_or_default('mystery', 1.2) == 1.2


@pytest.mark.parametrize('bad', [None, 0, -1, float('nan'), float('inf')])
def test_invalid_user_density_falls_back(bad):
    assert get_ingredient_density_or_default('flour', bad) == 0.53


def test_table_is_read_only():
    with pytest.raises(TypeError):
        INGREDIENT_DENSITIES['flour'] = 1.0


def test_average_weight():
    assert get_average_weight('Eggs') == 50
    assert get_average_weight('Large free range eggs') == 58
    assert get_average_weight('Ripe bananas') == 120
    assert get_average_weight('flour') is None
