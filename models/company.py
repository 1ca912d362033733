"""
Company Model

Contains the Company model. Every ingredient and recipe belongs to one
company (tenant).
"""

from .base import db


class Company(db.Model):
    """Tenant owning ingredients and recipes."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False)
    currency_symbol = db.Column(db.String(5), default='£')
