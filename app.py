import logging

from flask import Flask, request, jsonify
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from config import get_config
from constants import (
    VALID_UNITS, VALID_PACK_UNITS, VALID_RECIPE_TYPES, MAX_LENGTHS,
    MAX_PRICE, MAX_QUANTITY, MAX_DENSITY, MARKUP_MULTIPLIERS,
)
from models import db, Company, Ingredient, IngredientPriceTier, Recipe, RecipeItem
from services import (
    parse_quantity, safe_float, safe_int,
    normalize_unit, to_base, convert_between_units, parse_pack_size,
    normalize_ingredient_name, get_ingredient_density_or_default,
    compute_ingredient_cost, ingredient_pricing_from_record,
    suggest_sell_price, price_for_food_cost, format_cost_breakdown,
    summarize_recipe,
)
from services.density import is_valid_density
from utils.sanitizer import sanitize_text, sanitize_allergens

app = Flask(__name__)
app.config.from_object(get_config())

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

db.init_app(app)
migrate = Migrate(app, db)


def _error(message, status=400):
    return jsonify({'error': message}), status


@app.errorhandler(404)
def not_found(e):
    return _error('Not found', 404)


@app.errorhandler(400)
def bad_request(e):
    return _error(getattr(e, 'description', None) or 'Bad request', 400)


def _request_data():
    """JSON body if there is one, otherwise the submitted form."""
    return request.get_json(silent=True) or request.form


def _currency_for(company_id):
    company = db.session.get(Company, company_id)
    if company is not None and company.currency_symbol:
        return company.currency_symbol
    return app.config['CURRENCY_SYMBOL']


def _ingredient_to_dict(ingredient):
    return {
        'id': ingredient.id,
        'company_id': ingredient.company_id,
        'name': ingredient.name,
        'supplier': ingredient.supplier,
        'pack_price': ingredient.pack_price,
        'pack_quantity': ingredient.pack_quantity,
        'pack_unit': ingredient.pack_unit,
        'density_g_per_ml': ingredient.density_g_per_ml,
        'piece_weight_g': ingredient.piece_weight_g,
        'allergens': ingredient.allergens,
        'batch_tiers': [
            {'pack_quantity': t.pack_quantity, 'pack_price': t.pack_price}
            for t in ingredient.batch_tiers
        ],
    }


def _summary_response(recipe, summary, company_id):
    data = summary.to_dict()
    data['recipe_id'] = recipe.id
    data['name'] = recipe.name
    data['currency_symbol'] = _currency_for(company_id)
    per_serving = summary.cost_per_serving
    data['suggested_sell_price'] = suggest_sell_price(
        per_serving, app.config['DEFAULT_MARKUP_MULTIPLIER'])
    data['markup_options'] = {
        str(m): suggest_sell_price(per_serving, m) for m in MARKUP_MULTIPLIERS
    }
    return data


def _load_recipe(company_id, recipe_id):
    return Recipe.query.options(
        joinedload(Recipe.items).joinedload(RecipeItem.ingredient)
    ).filter_by(id=recipe_id, company_id=company_id).first_or_404()


# ============================================
# Ingredient routes
# ============================================

def _read_pack(data):
    """
    Read pack size fields into (pack_quantity, pack_unit, factor).

    Accepts either pack_size ("6x12L", "1.5kg") or pack_quantity with
    pack_unit. Weight and volume quantities are returned in the base unit;
    factor converts amounts typed in the submitted unit to that base unit.
    Counted packs ('each', 'slice') keep their unit and count.
    """
    pack_size = str(data.get('pack_size') or '').strip()
    if pack_size:
        parsed = parse_pack_size(pack_size)
        if parsed is None:
            raise ValueError(f'Invalid pack size: {pack_size}')
        return parsed.amount, parsed.unit, 1.0

    unit = normalize_unit(data.get('pack_unit') or 'g')
    if unit is None:
        raise ValueError(f"Invalid pack unit: {data.get('pack_unit')}")
    if unit in VALID_PACK_UNITS:
        pack_unit, factor = unit, 1.0
    else:
        one = to_base(1, unit)
        if one.approximate:
            raise ValueError(f'Pack unit must be a weight, volume, each or slice: {unit}')
        pack_unit, factor = one.unit, one.amount

    raw_qty = data.get('pack_quantity')
    if raw_qty in (None, ''):
        return None, pack_unit, factor
    qty = parse_quantity(raw_qty)
    if qty is None or qty > MAX_QUANTITY:
        raise ValueError(f'Invalid pack quantity: {raw_qty}')
    return qty * factor, pack_unit, factor


def _read_tiers(raw_tiers, pack_unit, factor):
    """Read batch tiers; every tier is stored in the ingredient's pack_unit."""
    tiers = []
    for raw in raw_tiers or ():
        if not isinstance(raw, dict):
            raise ValueError('Each batch tier must be an object')
        if raw.get('pack_size'):
            parsed = parse_pack_size(str(raw['pack_size']))
            if parsed is not None and parsed.unit != pack_unit:
                raise ValueError(f"Batch tier {raw['pack_size']} is not measured in {pack_unit}")
            qty = parsed.amount if parsed is not None else None
        else:
            qty = parse_quantity(raw.get('pack_quantity'))
            qty = qty * factor if qty is not None else None
        price = parse_quantity(raw.get('pack_price'))
        if not qty or price is None or price > MAX_PRICE:
            raise ValueError('Batch tiers need a positive pack quantity and a non-negative price')
        tiers.append(IngredientPriceTier(pack_quantity=qty, pack_price=price))
    return tiers


@app.route('/api/companies/<int:company_id>/ingredients', methods=['POST'])
def ingredient_add(company_id):
    db.get_or_404(Company, company_id)
    data = _request_data()

    name = sanitize_text(data.get('name', ''), max_length=MAX_LENGTHS['ingredient_name'])
    if not name:
        return _error('Ingredient name is required')

    existing = Ingredient.query.filter(
        Ingredient.company_id == company_id,
        db.func.lower(Ingredient.name) == name.lower(),
    ).first()
    if existing:
        return _error(f'An ingredient named "{name}" already exists')

    raw_price = data.get('pack_price')
    pack_price = None
    if raw_price not in (None, ''):
        pack_price = parse_quantity(raw_price)
        if pack_price is None or pack_price > MAX_PRICE:
            return _error(f'Invalid pack price: {raw_price}')

    try:
        pack_quantity, pack_unit, factor = _read_pack(data)
        tiers = _read_tiers((request.get_json(silent=True) or {}).get('batch_tiers'), pack_unit, factor)
    except ValueError as e:
        return _error(str(e))

    density_str = data.get('density_g_per_ml')
    density = None
    if density_str not in (None, ''):
        density = safe_float(density_str, default=None)
        if not is_valid_density(density) or density > MAX_DENSITY:
            return _error(f'Invalid density: {density_str}')

    piece_str = data.get('piece_weight_g')
    piece_weight = None
    if piece_str not in (None, ''):
        piece_weight = safe_float(piece_str, default=None, max_val=MAX_QUANTITY)
        if piece_weight is None or piece_weight <= 0:
            return _error(f'Invalid piece weight: {piece_str}')

    ingredient = Ingredient(
        company_id=company_id,
        name=name,
        supplier=sanitize_text(data.get('supplier', ''), max_length=MAX_LENGTHS['supplier']),
        pack_price=pack_price,
        pack_quantity=pack_quantity,
        pack_unit=pack_unit,
        density_g_per_ml=density,
        piece_weight_g=piece_weight,
        allergens=sanitize_allergens(data.get('allergens'), max_length=MAX_LENGTHS['allergens']),
        batch_tiers=tiers,
    )
    db.session.add(ingredient)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to save ingredient %r", name)
        return _error('Failed to save')

    logger.info("Ingredient %s added for company %s", ingredient.id, company_id)
    return jsonify(_ingredient_to_dict(ingredient)), 201


@app.route('/api/companies/<int:company_id>/ingredients/<int:id>/cost')
def ingredient_cost(company_id, id):
    ingredient = Ingredient.query.filter_by(id=id, company_id=company_id).first_or_404()

    raw_qty = request.args.get('quantity', '1')
    quantity = parse_quantity(raw_qty)
    if quantity is None:
        return _error(f'Invalid quantity: {raw_qty}')
    unit = request.args.get('unit') or ingredient.pack_unit

    result = compute_ingredient_cost(quantity, unit, ingredient_pricing_from_record(ingredient))
    return jsonify({
        'ingredient_id': ingredient.id,
        'name': ingredient.name,
        'quantity': quantity,
        'unit': unit,
        'currency_symbol': _currency_for(company_id),
        **result.to_dict(),
    })


# ============================================
# Recipe routes
# ============================================

def _read_items(company_id, raw_items):
    items = []
    for position, raw in enumerate(raw_items or ()):
        if not isinstance(raw, dict):
            raise ValueError('Each recipe item must be an object')
        quantity = parse_quantity(raw.get('quantity'))
        if quantity is None or quantity > MAX_QUANTITY:
            raise ValueError(f"Invalid quantity: {raw.get('quantity')}")

        sub_recipe_id = raw.get('sub_recipe_id')
        if sub_recipe_id is not None:
            sub = Recipe.query.filter_by(id=safe_int(sub_recipe_id, default=0), company_id=company_id).first()
            if sub is None:
                raise ValueError(f'Unknown sub-recipe: {sub_recipe_id}')
            items.append(RecipeItem(position=position, sub_recipe_id=sub.id,
                                    quantity=quantity, unit=raw.get('unit') or 'each'))
            continue

        ingredient = Ingredient.query.filter_by(
            id=safe_int(raw.get('ingredient_id'), default=0), company_id=company_id).first()
        if ingredient is None:
            raise ValueError(f"Unknown ingredient: {raw.get('ingredient_id')}")
        unit = normalize_unit(raw.get('unit'))
        if unit not in VALID_UNITS:
            raise ValueError(f"Invalid unit: {raw.get('unit')}")
        items.append(RecipeItem(position=position, ingredient_id=ingredient.id,
                                quantity=quantity, unit=unit))
    return items


@app.route('/api/companies/<int:company_id>/recipes', methods=['POST'])
def recipe_add(company_id):
    db.get_or_404(Company, company_id)
    data = request.get_json(silent=True) or {}

    name = sanitize_text(data.get('name', ''), max_length=MAX_LENGTHS['recipe_name'])
    if not name:
        return _error('Recipe name is required')

    recipe_type = (data.get('recipe_type') or 'batch').lower()
    if recipe_type not in VALID_RECIPE_TYPES:
        return _error(f'Invalid recipe type: {recipe_type}')

    base_servings = parse_quantity(data.get('base_servings', 1))
    if not base_servings:
        return _error('Base servings must be greater than zero')

    sell_price = None
    if data.get('sell_price') not in (None, ''):
        sell_price = parse_quantity(data.get('sell_price'))
        if sell_price is None or sell_price > MAX_PRICE:
            return _error(f"Invalid sell price: {data.get('sell_price')}")

    slices = data.get('slices_per_batch')
    slices = safe_int(slices, default=None, min_val=1) if slices not in (None, '') else None

    try:
        items = _read_items(company_id, data.get('items'))
    except ValueError as e:
        return _error(str(e))

    recipe = Recipe(
        company_id=company_id,
        name=name,
        base_servings=base_servings,
        recipe_type=recipe_type,
        slices_per_batch=slices,
        sell_price=sell_price,
        items=items,
    )
    db.session.add(recipe)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to save recipe %r", name)
        return _error('Failed to save')

    return jsonify(_summary_response(recipe, summarize_recipe(recipe), company_id)), 201


@app.route('/api/companies/<int:company_id>/recipes/<int:id>/cost')
def recipe_cost(company_id, id):
    recipe = _load_recipe(company_id, id)

    servings = None
    raw_servings = request.args.get('servings')
    if raw_servings not in (None, ''):
        servings = parse_quantity(raw_servings)
        if servings is None:
            return _error(f'Invalid servings: {raw_servings}')

    sell_price = None
    raw_price = request.args.get('sell_price')
    if raw_price not in (None, ''):
        sell_price = parse_quantity(raw_price)
        if sell_price is None:
            return _error(f'Invalid sell price: {raw_price}')

    summary = summarize_recipe(recipe, target_servings=servings, sell_price=sell_price)

    if request.args.get('format') == 'text':
        text = format_cost_breakdown(summary, _currency_for(company_id))
        return text, 200, {'Content-Type': 'text/plain; charset=utf-8'}

    return jsonify(_summary_response(recipe, summary, company_id))


@app.route('/api/companies/<int:company_id>/recipes/<int:id>/sell-price', methods=['POST'])
def recipe_sell_price(company_id, id):
    """
    Store a recipe's sell price.

    Accepts sell_price directly, a markup multiplier applied to the cost per
    serving, or a target food-cost percentage. An empty sell_price clears it.
    """
    recipe = _load_recipe(company_id, id)
    data = _request_data()

    if data.get('multiplier') not in (None, ''):
        multiplier = parse_quantity(data.get('multiplier'))
        price = suggest_sell_price(summarize_recipe(recipe).cost_per_serving, multiplier)
        if price is None:
            return _error(f"Invalid multiplier: {data.get('multiplier')}")
    elif data.get('target_food_cost_pct') not in (None, ''):
        target = parse_quantity(data.get('target_food_cost_pct'))
        price = price_for_food_cost(summarize_recipe(recipe).cost_per_serving, target)
        if price is None:
            return _error(f"Invalid target food cost: {data.get('target_food_cost_pct')}")
    elif data.get('sell_price') in (None, ''):
        price = None
    else:
        price = parse_quantity(data.get('sell_price'))
        if price is None or price > MAX_PRICE:
            return _error(f"Invalid sell price: {data.get('sell_price')}")

    recipe.sell_price = round(price, 2) if price is not None else None
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to save sell price for recipe %s", id)
        return _error('Failed to save')

    return jsonify(_summary_response(recipe, summarize_recipe(recipe), company_id))


# ============================================
# Conversion helpers
# ============================================

@app.route('/api/density')
def density_lookup():
    name = request.args.get('name', '')
    user_density = None
    raw = request.args.get('density')
    if raw not in (None, ''):
        user_density = safe_float(raw, default=None)

    density = get_ingredient_density_or_default(name, user_density)
    if density is None:
        source = None
    elif is_valid_density(user_density):
        source = 'user'
    else:
        source = 'table'

    return jsonify({
        'name': name,
        'normalized_name': normalize_ingredient_name(name),
        'density': density,
        'source': source,
    })


@app.route('/api/convert')
def convert():
    raw_qty = request.args.get('quantity', '')
    quantity = parse_quantity(raw_qty)
    if quantity is None:
        return _error(f'Invalid quantity: {raw_qty}')

    from_unit = request.args.get('from', '')
    to_unit = request.args.get('to', '')
    for unit in (from_unit, to_unit):
        if normalize_unit(unit) is None:
            return _error(f'Unknown unit: {unit}')

    density = None
    raw_density = request.args.get('density')
    if raw_density not in (None, ''):
        density = safe_float(raw_density, default=None)
    elif request.args.get('name'):
        density = get_ingredient_density_or_default(request.args['name'])

    result = convert_between_units(quantity, from_unit, to_unit, density=density)
    if result is None:
        return _error(f'Cannot convert {from_unit} to {to_unit} without a density')

    return jsonify({
        'quantity': quantity,
        'from': normalize_unit(from_unit),
        'to': normalize_unit(to_unit),
        'density': density,
        'result': result,
    })


def init_db():
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()


if __name__ == '__main__':
    init_db()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
