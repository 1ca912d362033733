"""
Ingredient Constants

Contains ingredient densities, average piece weights, and the word lists
used to normalize ingredient names before looking them up.
"""

from types import MappingProxyType

# Density in grams per millilitre, keyed by normalized ingredient name.
# Used only to cross-convert between volume and mass.
INGREDIENT_DENSITIES = MappingProxyType({
    # Flours and starches
    'flour': 0.53,
    'plain flour': 0.53,
    'all purpose flour': 0.53,
    'bread flour': 0.55,
    'strong flour': 0.55,
    'cake flour': 0.5,
    'self raising flour': 0.53,
    'wholemeal flour': 0.55,
    'whole wheat flour': 0.55,
    'rye flour': 0.55,
    'cornflour': 0.6,
    'cornstarch': 0.6,
    'coconut flour': 0.4,
    'almond flour': 0.4,
    'ground almond': 0.4,
    'cocoa powder': 0.4,
    'oat': 0.41,
    # Sugars and syrups
    'sugar': 0.85,
    'granulated sugar': 0.85,
    'caster sugar': 0.85,
    'brown sugar': 0.8,
    'icing sugar': 0.56,
    'powdered sugar': 0.56,
    'honey': 1.42,
    'golden syrup': 1.4,
    'maple syrup': 1.32,
    'molasses': 1.4,
    'treacle': 1.4,
    # Raising agents and salt
    'baking powder': 0.8,
    'baking soda': 0.87,
    'bicarbonate soda': 0.87,
    'salt': 1.2,
    'sea salt': 1.1,
    'yeast': 0.6,
    # Dairy
    'water': 1.0,
    'milk': 1.03,
    'whole milk': 1.03,
    'skimmed milk': 1.03,
    'buttermilk': 1.03,
    'butter': 0.91,
    'margarine': 0.91,
    'cream': 1.0,
    'double cream': 1.0,
    'single cream': 1.0,
    'whipping cream': 1.0,
    'sour cream': 1.0,
    'cream cheese': 1.0,
    'yogurt': 1.05,
    'greek yogurt': 1.05,
    # Oils
    'oil': 0.92,
    'vegetable oil': 0.92,
    'olive oil': 0.92,
    'sunflower oil': 0.92,
    'rapeseed oil': 0.92,
    'coconut oil': 0.92,
    # Eggs
    'egg': 1.03,
    'egg white': 1.03,
    'egg yolk': 1.03,
    # Nuts and seeds
    'almond': 0.6,
    'walnut': 0.6,
    'pecan': 0.6,
    'hazelnut': 0.6,
    'sesame seed': 0.6,
    'poppy seed': 0.6,
    'chia seed': 0.6,
    # Spices and flavourings
    'cinnamon': 0.4,
    'ginger': 0.4,
    'nutmeg': 0.4,
    'vanilla extract': 0.88,
    # Other
    'jam': 1.3,
    'peanut butter': 1.0,
    'lemon juice': 1.0,
    'orange juice': 1.0,
    'vinegar': 1.0,
    'coconut milk': 1.0,
    'chocolate chip': 0.72,
    'raisin': 0.64,
})

# Average weight per piece (in grams), keyed by normalized ingredient name.
# Used when a recipe counts pieces ("2 each") of an ingredient.
AVERAGE_WEIGHTS = MappingProxyType({
    'egg': 50,
    'large egg': 58,
    'egg yolk': 18,
    'egg white': 32,
    'banana': 120,
    'apple': 180,
    'lemon': 85,
    'lime': 65,
    'orange': 180,
    'carrot': 70,
    'bread': 30,
    'bun': 60,
    'tortilla': 45,
    'croissant': 60,
    'vanilla pod': 3,
})

# Words stripped from names before lookup (set for O(1) lookup)
NAME_STOP_WORDS = frozenset({
    'fresh', 'dried', 'chopped', 'diced', 'sliced', 'minced', 'sifted',
    'organic', 'frozen', 'unsalted', 'salted', 'free', 'range',
    'a', 'an', 'the', 'of',
})

# Words that end in 's' naturally and must not be singularized
NO_STRIP_S = frozenset({'molasses', 'hummus', 'swiss', 'grass', 'couscous', 'asparagus'})

# Irregular plurals
SINGULAR_MAP = MappingProxyType({
    'berries': 'berry',
    'cherries': 'cherry',
    'leaves': 'leaf',
    'tomatoes': 'tomato',
    'potatoes': 'potato',
})
