"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .company import Company
from .ingredient import Ingredient, IngredientPriceTier
from .recipe import Recipe, RecipeItem

__all__ = [
    'db',
    'Company',
    'Ingredient',
    'IngredientPriceTier',
    'Recipe',
    'RecipeItem',
]
