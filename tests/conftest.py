import os
import sys

# Must be set before app is imported so the testing config is picked up
os.environ['FLASK_ENV'] = 'testing'

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest


@pytest.fixture
def app():
    from app import app as flask_app
    from models import db

    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def company(app):
    from models import db, Company

    company = Company(name='Crumb & Co', currency_symbol='£')
    db.session.add(company)
    db.session.commit()
    return company


@pytest.fixture
def make_ingredient(app, company):
    from models import db, Ingredient, IngredientPriceTier

    def _make(name, pack_price=None, pack_quantity=None, pack_unit='g',
              company_id=None, tiers=(), **extra):
        ingredient = Ingredient(
            company_id=company_id or company.id,
            name=name,
            pack_price=pack_price,
            pack_quantity=pack_quantity,
            pack_unit=pack_unit,
            batch_tiers=[IngredientPriceTier(pack_quantity=q, pack_price=p) for q, p in tiers],
            **extra,
        )
        db.session.add(ingredient)
        db.session.commit()
        return ingredient

    return _make


@pytest.fixture
def make_recipe(app, company):
    from models import db, Recipe, RecipeItem

    def _make(name, items=(), base_servings=1, company_id=None, **extra):
        recipe = Recipe(
            company_id=company_id or company.id,
            name=name,
            base_servings=base_servings,
            **extra,
        )
        for position, (target, quantity, unit) in enumerate(items):
            item = RecipeItem(position=position, quantity=quantity, unit=unit)
            if isinstance(target, Recipe):
                item.sub_recipe_id = target.id
            else:
                item.ingredient_id = target.id
            recipe.items.append(item)
        db.session.add(recipe)
        db.session.commit()
        return recipe

    return _make
