"""
Ingredient Models

Contains the Ingredient and IngredientPriceTier models for managing
purchased ingredients and their pack pricing.
"""

from .base import db


class Ingredient(db.Model):
    """
    Ingredient as bought: a pack of pack_quantity pack_unit costs pack_price.

    pack_unit is a base unit ('g' or 'ml') or a piece count ('each',
    'slice'); pack_quantity is already expressed in it (a 1.5kg bag is
    stored as 1500 g, a tray of 30 eggs as 30 each). Counted packs are
    costed against weights through piece_weight_g.

    density_g_per_ml lets volume recipe lines be costed against a weight
    pack (and the reverse). When empty a built-in density is looked up
    by name.
    """
    __table_args__ = (
        db.UniqueConstraint('company_id', 'name', name='uq_ingredient_company_name'),
    )

    id = db.Column(db.Integer, primary_key=True)
    company_id = db.Column(db.Integer, db.ForeignKey('company.id', ondelete='CASCADE'), nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    supplier = db.Column(db.String(200), default='')

    # Pack pricing (nullable: an ingredient may be added before it is priced)
    pack_price = db.Column(db.Float, nullable=True)
    pack_quantity = db.Column(db.Float, nullable=True)
    pack_unit = db.Column(db.String(10), default='g', nullable=False)

    density_g_per_ml = db.Column(db.Float, nullable=True)

    # Average weight of one piece in grams, for recipes counting pieces
    piece_weight_g = db.Column(db.Float, nullable=True)

    # Comma separated, e.g. "Gluten, Milk"
    allergens = db.Column(db.String(500), default='')

    batch_tiers = db.relationship(
        'IngredientPriceTier', backref='ingredient', lazy=True,
        cascade='all, delete-orphan', order_by='IngredientPriceTier.pack_quantity',
    )


class IngredientPriceTier(db.Model):
    """Bulk purchase option: pack_quantity (in the ingredient's pack_unit) for pack_price."""
    id = db.Column(db.Integer, primary_key=True)
    ingredient_id = db.Column(db.Integer, db.ForeignKey('ingredient.id', ondelete='CASCADE'), nullable=False, index=True)
    pack_quantity = db.Column(db.Float, nullable=False)
    pack_price = db.Column(db.Float, nullable=False)
