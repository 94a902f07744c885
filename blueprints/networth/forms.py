from flask_wtf import FlaskForm
from wtforms import FloatField, SelectField, StringField, SubmitField
from wtforms.validators import Length, NumberRange, Optional

from utils.validators import FiniteNumber


class NetWorthForm(FlaskForm):
    """Today's net worth, as two totals or as per-category rows.

    Breakdown rows are repeated inputs (``asset_category`` / ``asset_amount`` /
    ``asset_custom`` and the ``liability_*`` equivalents) read from
    ``request.form`` by the route.
    """
    mode = SelectField('Input Mode', choices=[('total', 'Totals'), ('breakdown', 'Breakdown')],
                       default='total')
    total_assets = FloatField('Total Assets', default=0, validators=[
        Optional(),
        FiniteNumber(),
        NumberRange(min=0, message='Total assets cannot be negative')
    ])
    total_liabilities = FloatField('Total Liabilities', default=0, validators=[
        Optional(),
        FiniteNumber(),
        NumberRange(min=0, message='Total liabilities cannot be negative')
    ])
    notes = StringField('Notes', validators=[Optional(), Length(max=500)])
    submit = SubmitField('Save Entry')
