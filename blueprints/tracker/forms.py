from flask_wtf import FlaskForm
from wtforms import FloatField, IntegerField, SelectField, SubmitField
from wtforms.validators import InputRequired, NumberRange

from models.records import MONTHS, TRANSACTION_TYPES
from utils.validators import FiniteNumber


class TransactionForm(FlaskForm):
    """One income or expense amount for a month"""
    year = IntegerField('Year', validators=[
        InputRequired(message='Year is required'),
        NumberRange(min=1900, max=2200, message='Enter a valid year')
    ])
    month = SelectField('Month', choices=[(m, m) for m in MONTHS])
    type = SelectField('Type', choices=[(t, t) for t in TRANSACTION_TYPES])
    amount = FloatField('Amount', validators=[
        InputRequired(message='Amount is required'),
        FiniteNumber(),
        NumberRange(min=0, message='Amount cannot be negative')
    ])
    submit = SubmitField('Add Transaction')


class BalanceForm(FlaskForm):
    """Current balance for this month"""
    amount = FloatField('Current Balance', validators=[
        InputRequired(message='Amount is required'),
        FiniteNumber()
    ])
    submit = SubmitField('Save Balance')
