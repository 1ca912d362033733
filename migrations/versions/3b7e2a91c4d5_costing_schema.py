"""Costing schema: companies, ingredients with price tiers, recipes

Revision ID: 3b7e2a91c4d5
Revises:
Create Date: 2026-10-18 10:12:41.518204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7e2a91c4d5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('company',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('currency_symbol', sa.String(length=5), nullable=True),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_company')),
    sa.UniqueConstraint('name', name=op.f('uq_company_name'))
    )
    op.create_table('ingredient',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('company_id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('supplier', sa.String(length=200), nullable=True),
    sa.Column('pack_price', sa.Float(), nullable=True),
    sa.Column('pack_quantity', sa.Float(), nullable=True),
    sa.Column('pack_unit', sa.String(length=10), nullable=False),
    sa.Column('density_g_per_ml', sa.Float(), nullable=True),
    sa.Column('piece_weight_g', sa.Float(), nullable=True),
    sa.Column('allergens', sa.String(length=500), nullable=True),
    sa.ForeignKeyConstraint(['company_id'], ['company.id'], name=op.f('fk_ingredient_company_id_company'), ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_ingredient')),
    sa.UniqueConstraint('company_id', 'name', name='uq_ingredient_company_name')
    )
    with op.batch_alter_table('ingredient', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_ingredient_company_id'), ['company_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_ingredient_name'), ['name'], unique=False)

    op.create_table('ingredient_price_tier',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('ingredient_id', sa.Integer(), nullable=False),
    sa.Column('pack_quantity', sa.Float(), nullable=False),
    sa.Column('pack_price', sa.Float(), nullable=False),
    sa.ForeignKeyConstraint(['ingredient_id'], ['ingredient.id'], name=op.f('fk_ingredient_price_tier_ingredient_id_ingredient'), ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_ingredient_price_tier'))
    )
    with op.batch_alter_table('ingredient_price_tier', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_ingredient_price_tier_ingredient_id'), ['ingredient_id'], unique=False)

    op.create_table('recipe',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('company_id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=200), nullable=False),
    sa.Column('base_servings', sa.Float(), nullable=False),
    sa.Column('recipe_type', sa.String(length=10), nullable=False),
    sa.Column('slices_per_batch', sa.Integer(), nullable=True),
    sa.Column('sell_price', sa.Float(), nullable=True),
    sa.ForeignKeyConstraint(['company_id'], ['company.id'], name=op.f('fk_recipe_company_id_company'), ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_recipe')),
    sa.UniqueConstraint('company_id', 'name', name='uq_recipe_company_name')
    )
    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_company_id'), ['company_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_name'), ['name'], unique=False)

    op.create_table('recipe_item',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('recipe_id', sa.Integer(), nullable=False),
    sa.Column('position', sa.Integer(), nullable=True),
    sa.Column('ingredient_id', sa.Integer(), nullable=True),
    sa.Column('sub_recipe_id', sa.Integer(), nullable=True),
    sa.Column('quantity', sa.Float(), nullable=False),
    sa.Column('unit', sa.String(length=20), nullable=False),
    sa.ForeignKeyConstraint(['ingredient_id'], ['ingredient.id'], name=op.f('fk_recipe_item_ingredient_id_ingredient'), ondelete='SET NULL'),
    sa.ForeignKeyConstraint(['recipe_id'], ['recipe.id'], name=op.f('fk_recipe_item_recipe_id_recipe'), ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['sub_recipe_id'], ['recipe.id'], name=op.f('fk_recipe_item_sub_recipe_id_recipe'), ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id', name=op.f('pk_recipe_item'))
    )
    with op.batch_alter_table('recipe_item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_recipe_item_recipe_id'), ['recipe_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_item_ingredient_id'), ['ingredient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_recipe_item_sub_recipe_id'), ['sub_recipe_id'], unique=False)


def downgrade():
    with op.batch_alter_table('recipe_item', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_item_sub_recipe_id'))
        batch_op.drop_index(batch_op.f('ix_recipe_item_ingredient_id'))
        batch_op.drop_index(batch_op.f('ix_recipe_item_recipe_id'))
    op.drop_table('recipe_item')

    with op.batch_alter_table('recipe', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_recipe_name'))
        batch_op.drop_index(batch_op.f('ix_recipe_company_id'))
    op.drop_table('recipe')

    with op.batch_alter_table('ingredient_price_tier', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_ingredient_price_tier_ingredient_id'))
    op.drop_table('ingredient_price_tier')

    with op.batch_alter_table('ingredient', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_ingredient_name'))
        batch_op.drop_index(batch_op.f('ix_ingredient_company_id'))
    op.drop_table('ingredient')

    op.drop_table('company')
