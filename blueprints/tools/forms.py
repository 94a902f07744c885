from flask_wtf import FlaskForm
from wtforms import BooleanField, FloatField, SelectField, SubmitField
from wtforms.validators import InputRequired, NumberRange, Optional

from services.borrow_service import INCOME_MODE, PERCENTAGE_MODE
from utils.validators import FiniteNumber


class BuyBorrowDieForm(FlaskForm):
    """Inputs of the Buy, Borrow, Die calculator"""
    current_asset_value = FloatField('Current Asset Value', validators=[
        InputRequired(message='Asset value is required'),
        FiniteNumber(),
        NumberRange(min=0, message='Asset value cannot be negative')
    ])
    expected_annual_return = FloatField('Expected Annual Return (%)', validators=[
        InputRequired(message='Expected return is required'),
        NumberRange(min=-100, max=100)
    ])
    loan_to_value_ratio = FloatField('Loan-to-Value Ratio (%)', validators=[
        InputRequired(message='Loan-to-value ratio is required'),
        NumberRange(min=0, max=100)
    ])
    interest_rate = FloatField('Interest Rate (%)', validators=[
        InputRequired(message='Interest rate is required'),
        NumberRange(min=0, max=100)
    ])
    calculation_mode = SelectField('Calculation Mode', default=PERCENTAGE_MODE, choices=[
        (PERCENTAGE_MODE, 'Percentage of asset value'),
        (INCOME_MODE, 'Desired monthly income'),
    ])
    desired_annual_borrow_rate = FloatField('Desired Annual Borrow Rate (%)', validators=[
        Optional(), NumberRange(min=0, max=100)
    ])
    desired_monthly_income = FloatField('Desired Monthly Income', validators=[
        Optional(), FiniteNumber(), NumberRange(min=0)
    ])
    adjust_for_inflation = BooleanField('Adjust for Inflation')
    inflation_rate = FloatField('Inflation Rate (%)', validators=[
        Optional(), NumberRange(min=0, max=100)
    ])
    submit = SubmitField('Calculate')

    def validate(self, extra_validators=None):
        """Field checks, then the inputs each calculation mode needs"""
        if not super().validate(extra_validators):
            return False

        missing = []
        if self.calculation_mode.data == PERCENTAGE_MODE:
            if self.desired_annual_borrow_rate.data is None:
                missing.append((self.desired_annual_borrow_rate, 'Borrow rate is required in percentage mode'))
        elif self.desired_monthly_income.data is None:
            missing.append((self.desired_monthly_income, 'Monthly income is required in income mode'))
        elif self.adjust_for_inflation.data and self.inflation_rate.data is None:
            missing.append((self.inflation_rate, 'Inflation rate is required when adjusting for inflation'))

        for field, message in missing:
            field.errors.append(message)
        return not missing
