from flask_wtf import FlaskForm
from wtforms import FloatField, HiddenField, SelectField, StringField, SubmitField
from wtforms.validators import AnyOf, DataRequired, InputRequired, Length, NumberRange

from models.records import BUDGET_GROUPS, COST_KINDS, FREQUENCY_FACTORS
from utils.validators import FiniteNumber


class CostForm(FlaskForm):
    """Add or edit a recurring or one-time cost"""
    group = HiddenField('Group', validators=[AnyOf(BUDGET_GROUPS, message='Unknown budget group')])
    kind = HiddenField('Type', validators=[AnyOf(COST_KINDS, message='Unknown cost type')])
    cost_id = HiddenField('Cost')
    name = StringField('Description', validators=[
        DataRequired(message='Description is required'),
        Length(max=120)
    ])
    amount = FloatField('Amount', validators=[
        InputRequired(message='Amount is required'),
        FiniteNumber(),
        NumberRange(min=0, message='Amount cannot be negative')
    ])
    frequency = SelectField('Frequency', default='monthly',
                            choices=[(f, f.capitalize()) for f in FREQUENCY_FACTORS])
    submit = SubmitField('Save Cost')
