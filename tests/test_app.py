import pytest

from models import db, Company, Ingredient


def _url(company, path):
    return f'/api/companies/{company.id}{path}'


@pytest.fixture
def flour(make_ingredient):
    return make_ingredient('Plain flour', 1.20, 1500, allergens='Gluten')


class TestIngredientApi:

    def test_create_converts_pack_to_base_unit(self, client, company):
        response = client.post(_url(company, '/ingredients'), json={
            'name': 'Strong Bread Flour',
            'supplier': 'Mill & Sons',
            'pack_price': 1.85,
            'pack_quantity': 1.5,
            'pack_unit': 'kg',
            'allergens': 'Gluten, gluten',
            'batch_tiers': [{'pack_quantity': 16, 'pack_price': 14.50}],
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['pack_quantity'] == 1500
        assert data['pack_unit'] == 'g'
        assert data['allergens'] == 'Gluten'
        assert data['batch_tiers'] == [{'pack_quantity': 16000, 'pack_price': 14.50}]
        assert data['supplier'] == 'Mill &amp; Sons'

    def test_create_from_pack_size(self, client, company):
        response = client.post(_url(company, '/ingredients'), json={
            'name': 'Whole milk', 'pack_price': 9.00, 'pack_size': '6x2L',
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['pack_quantity'] == 12000
        assert data['pack_unit'] == 'ml'

    def test_create_from_form(self, client, company):
        response = client.post(_url(company, '/ingredients'), data={
            'name': 'Caster sugar', 'pack_price': '1.10', 'pack_quantity': '1000', 'pack_unit': 'g',
        })
        assert response.status_code == 201
        assert Ingredient.query.filter_by(name='Caster sugar').one().pack_price == 1.10

    def test_unpriced_ingredient_allowed(self, client, company):
        response = client.post(_url(company, '/ingredients'), json={'name': 'Saffron'})
        assert response.status_code == 201
        assert response.get_json()['pack_price'] is None

    def test_create_counted_pack(self, client, company):
        response = client.post(_url(company, '/ingredients'), json={
            'name': 'Eggs', 'pack_price': 3.00, 'pack_quantity': 12, 'pack_unit': 'each',
            'piece_weight_g': 60,
        })
        assert response.status_code == 201
        data = response.get_json()
        assert data['pack_quantity'] == 12
        assert data['pack_unit'] == 'each'

        eggs_url = _url(company, f"/ingredients/{data['id']}/cost")
        by_count = client.get(eggs_url, query_string={'quantity': '3', 'unit': 'each'}).get_json()
        assert by_count['cost'] == pytest.approx(0.75)
        assert by_count['approximate'] is False

        by_weight = client.get(eggs_url, query_string={'quantity': '120', 'unit': 'g'}).get_json()
        assert by_weight['cost'] == pytest.approx(0.50)
        assert by_weight['approximate'] is True

    def test_tier_in_other_base_unit_rejected(self, client, company):
        response = client.post(_url(company, '/ingredients'), json={
            'name': 'Caster sugar', 'pack_price': 1.10, 'pack_quantity': 1, 'pack_unit': 'kg',
            'batch_tiers': [{'pack_size': '6x2L', 'pack_price': 5}],
        })
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Batch tier 6x2L is not measured in g'}
        assert Ingredient.query.filter_by(name='Caster sugar').first() is None

    def test_tier_pack_size_in_pack_unit(self, client, company):
        response = client.post(_url(company, '/ingredients'), json={
            'name': 'Caster sugar', 'pack_price': 1.10, 'pack_quantity': 1000, 'pack_unit': 'g',
            'batch_tiers': [{'pack_size': '5kg', 'pack_price': 4.80}],
        })
        assert response.status_code == 201
        assert response.get_json()['batch_tiers'] == [{'pack_quantity': 5000, 'pack_price': 4.80}]

    @pytest.mark.parametrize('payload,message', [
        ({'name': ''}, 'Ingredient name is required'),
        ({'name': 'Eggs', 'pack_unit': 'large', 'pack_quantity': 12},
         'Pack unit must be a weight, volume, each or slice: large'),
        ({'name': 'Eggs', 'pack_unit': 'crate'}, 'Invalid pack unit: crate'),
        ({'name': 'Eggs', 'pack_price': -1}, 'Invalid pack price: -1'),
        ({'name': 'Eggs', 'pack_size': 'a box'}, 'Invalid pack size: a box'),
        ({'name': 'Eggs', 'density_g_per_ml': 0}, 'Invalid density: 0'),
    ])
    def test_create_rejects_bad_input(self, client, company, payload, message):
        response = client.post(_url(company, '/ingredients'), json=payload)
        assert response.status_code == 400
        assert response.get_json() == {'error': message}

    def test_duplicate_name_rejected(self, client, company, flour):
        response = client.post(_url(company, '/ingredients'), json={'name': 'PLAIN FLOUR'})
        assert response.status_code == 400
        assert 'already exists' in response.get_json()['error']

    def test_underscore_name_is_not_a_wildcard(self, client, company, make_ingredient):
        make_ingredient('abc')
        response = client.post(_url(company, '/ingredients'), json={'name': 'a_c'})
        assert response.status_code == 201
        assert response.get_json()['name'] == 'a_c'

    def test_unknown_company(self, client, app):
        response = client.post('/api/companies/999/ingredients', json={'name': 'Flour'})
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Not found'}

    def test_cost(self, client, company, flour):
        response = client.get(_url(company, f'/ingredients/{flour.id}/cost'),
                              query_string={'quantity': '500', 'unit': 'g'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['known'] is True
        assert data['cost'] == pytest.approx(0.40)
        assert data['currency_symbol'] == '£'

    def test_cost_by_volume(self, client, company, flour):
        response = client.get(_url(company, f'/ingredients/{flour.id}/cost'),
                              query_string={'quantity': '1 1/2', 'unit': 'cups'})
        data = response.get_json()
        assert data['quantity'] == 1.5
        assert data['cost'] == pytest.approx(round(360 * 0.53 * 1.20 / 1500, 4))

    def test_cost_unknown_unit_is_reported(self, client, company, flour):
        response = client.get(_url(company, f'/ingredients/{flour.id}/cost'),
                              query_string={'quantity': '2', 'unit': 'handful'})
        data = response.get_json()
        assert response.status_code == 200
        assert data['known'] is False
        assert data['cost'] is None
        assert data['reason'] == 'unknown_unit'

    def test_cost_invalid_quantity(self, client, company, flour):
        response = client.get(_url(company, f'/ingredients/{flour.id}/cost'),
                              query_string={'quantity': 'lots'})
        assert response.status_code == 400

    def test_cost_other_company_is_not_found(self, client, company, make_ingredient):
        other = Company(name='Rival Bakes')
        db.session.add(other)
        db.session.commit()
        theirs = make_ingredient('Flour', 1.0, 1000, company_id=other.id)
        response = client.get(_url(company, f'/ingredients/{theirs.id}/cost'))
        assert response.status_code == 404


class TestRecipeApi:

    @pytest.fixture
    def scones(self, client, company, flour, make_ingredient):
        butter = make_ingredient('Butter', 2.50, 250, allergens='Milk')
        response = client.post(_url(company, '/recipes'), json={
            'name': 'Scones',
            'base_servings': 12,
            'recipe_type': 'batch',
            'sell_price': 0.80,
            'items': [
                {'ingredient_id': flour.id, 'quantity': 450, 'unit': 'grams'},
                {'ingredient_id': butter.id, 'quantity': 100, 'unit': 'g'},
            ],
        })
        assert response.status_code == 201
        return response.get_json()

    def test_create_returns_summary(self, scones):
        assert scones['total_cost'] == pytest.approx(1.36)
        assert scones['cost_per_serving'] == pytest.approx(round(1.36 / 12, 4))
        assert scones['allergens'] == ['Gluten', 'Milk']
        assert scones['lines'][0]['unit'] == 'g'
        assert scones['is_complete'] is True

    def test_create_rejects_unknown_unit(self, client, company, flour):
        response = client.post(_url(company, '/recipes'), json={
            'name': 'Bad', 'items': [{'ingredient_id': flour.id, 'quantity': 1, 'unit': 'handful'}],
        })
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Invalid unit: handful'}

    def test_create_rejects_bad_type(self, client, company):
        response = client.post(_url(company, '/recipes'), json={'name': 'Bad', 'recipe_type': 'tray'})
        assert response.status_code == 400

    def test_cost_scaled(self, client, company, scones):
        response = client.get(_url(company, f"/recipes/{scones['recipe_id']}/cost"),
                              query_string={'servings': '24'})
        data = response.get_json()
        assert data['scale_factor'] == 2
        assert data['total_cost'] == pytest.approx(2.72)
        assert data['sell_price'] == 0.80

    def test_cost_with_sell_price(self, client, company, scones):
        response = client.get(_url(company, f"/recipes/{scones['recipe_id']}/cost"),
                              query_string={'sell_price': '0.50'})
        data = response.get_json()
        assert data['sell_price'] == 0.50
        assert data['food_cost_pct'] == pytest.approx(round(1.36 / 12 / 0.50 * 100, 2))
        assert data['health_band'] == 'Excellent'
        assert data['suggested_sell_price'] == pytest.approx(1.36 / 12 * 3)
        assert set(data['markup_options']) == {'2', '2.5', '3', '4'}

    def test_cost_invalid_servings(self, client, company, scones):
        response = client.get(_url(company, f"/recipes/{scones['recipe_id']}/cost"),
                              query_string={'servings': '-2'})
        assert response.status_code == 400

    def test_cost_as_text(self, client, company, scones):
        response = client.get(_url(company, f"/recipes/{scones['recipe_id']}/cost"),
                              query_string={'format': 'text'})
        assert response.mimetype == 'text/plain'
        text = response.get_data(as_text=True)
        assert text.startswith('Total Recipe Cost: £1.36')
        assert 'Allergens: Gluten, Milk' in text

    def test_unknown_recipe(self, client, company):
        response = client.get(_url(company, '/recipes/404/cost'))
        assert response.status_code == 404

    def test_set_sell_price(self, client, company, scones):
        url = _url(company, f"/recipes/{scones['recipe_id']}/sell-price")
        response = client.post(url, json={'sell_price': 0.45})
        assert response.status_code == 200
        assert response.get_json()['sell_price'] == 0.45

        response = client.post(url, data={'sell_price': ''})
        assert response.get_json()['sell_price'] is None

    def test_set_sell_price_from_multiplier(self, client, company, scones):
        url = _url(company, f"/recipes/{scones['recipe_id']}/sell-price")
        response = client.post(url, json={'multiplier': 4})
        assert response.get_json()['sell_price'] == round(1.36 / 12 * 4, 2)

    def test_set_sell_price_from_target_food_cost(self, client, company, scones):
        url = _url(company, f"/recipes/{scones['recipe_id']}/sell-price")
        response = client.post(url, json={'target_food_cost_pct': 25})
        data = response.get_json()
        assert data['sell_price'] == round(1.36 / 12 / 0.25, 2)

    def test_set_sell_price_rejects_negative(self, client, company, scones):
        url = _url(company, f"/recipes/{scones['recipe_id']}/sell-price")
        response = client.post(url, json={'sell_price': -1})
        assert response.status_code == 400


class TestConversionApi:

    def test_density_from_table(self, client):
        data = client.get('/api/density', query_string={'name': 'Whole Milk (semi)'}).get_json()
        assert data == {
            'name': 'Whole Milk (semi)',
            'normalized_name': 'whole milk',
            'density': 1.03,
            'source': 'table',
        }

    def test_density_from_user(self, client):
        data = client.get('/api/density', query_string={'name': 'flour', 'density': '0.6'}).get_json()
        assert data['density'] == 0.6
        assert data['source'] == 'user'

    def test_density_unknown(self, client):
        data = client.get('/api/density', query_string={'name': 'xanthan gum'}).get_json()
        assert data['density'] is None
        assert data['source'] is None

    def test_convert(self, client):
        data = client.get('/api/convert', query_string={'quantity': '2', 'from': 'cups', 'to': 'ml'}).get_json()
        assert data['result'] == pytest.approx(480)
        assert data['from'] == 'cup'

    def test_convert_with_named_density(self, client):
        data = client.get('/api/convert', query_string={
            'quantity': '1', 'from': 'cup', 'to': 'g', 'name': 'plain flour',
        }).get_json()
        assert data['result'] == pytest.approx(127.2)

    @pytest.mark.parametrize('params', [
        {'quantity': '1', 'from': 'cup', 'to': 'g'},
        {'quantity': '1', 'from': 'cup', 'to': 'bucket'},
        {'quantity': 'x', 'from': 'cup', 'to': 'ml'},
    ])
    def test_convert_errors(self, client, params):
        response = client.get('/api/convert', query_string=params)
        assert response.status_code == 400
        assert 'error' in response.get_json()
