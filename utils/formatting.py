"""
Display formatting used by the Jinja filters.

Amounts are kept at full precision everywhere else; rounding to two
decimals happens only here.  NaN (e.g. a savings rate with no income) is
shown as "N/A" rather than a number.
"""
import math


def _is_nan(value):
    return isinstance(value, float) and math.isnan(value)


def format_currency(value, symbol='$'):
    if value is None:
        value = 0.0
    if _is_nan(value):
        return 'N/A'
    sign = '-' if value < 0 else ''
    return f'{sign}{symbol}{abs(value):,.2f}'


def format_percent(value):
    if value is None or _is_nan(value):
        return 'N/A'
    return f'{value:,.2f}%'
