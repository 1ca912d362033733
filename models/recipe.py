"""
Recipe Models

Contains the Recipe and RecipeItem models for managing recipes,
their ingredient lines, and sub-recipe lines.
"""

from .base import db


class Recipe(db.Model):
    """Recipe with yield, type and stored sell price."""
    __table_args__ = (
        db.UniqueConstraint('company_id', 'name', name='uq_recipe_company_name'),
    )

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.Integer, db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    base_servings = db.Column(db.Float, default=1, nullable=False)
    recipe_type = db.Column(db.String(10), default='batch', nullable=False)  # 'single' or 'batch'
    slices_per_batch = db.Column(db.Integer, nullable=True)
    sell_price = db.Column(db.Float, nullable=True)
    items = db.relationship(
        'RecipeItem', backref='recipe', lazy=True, cascade='all, delete-orphan',
        foreign_keys='RecipeItem.recipe_id', order_by='RecipeItem.position',
    )


class RecipeItem(db.Model):
    """
    One recipe line. Exactly one of ingredient_id / sub_recipe_id is set.

    For a sub-recipe, quantity counts servings of the sub-recipe and unit is
    informational.
    """
    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, default=0)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='SET NULL'), nullable=True, index=True)
    sub_recipe_id = db.Column(db.Integer, db.ForeignKey('recipe.id', ondelete='SET NULL'), nullable=True, index=True)
    quantity = db.Column(db.Float, nullable=False)
    unit = db.Column(db.String(20), nullable=False)
    ingredient = db.relationship('Ingredient')
    sub_recipe = db.relationship('Recipe', foreign_keys=[sub_recipe_id])
