import math

from wtforms.validators import ValidationError


class FiniteNumber:
    """Reject the 'inf' and 'nan' spellings FloatField accepts."""

    def __init__(self, message=None):
        self.message = message or 'Enter a valid number'

    def __call__(self, form, field):
        if field.data is not None and not math.isfinite(field.data):
            raise ValidationError(self.message)
