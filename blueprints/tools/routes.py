from flask import current_app, render_template, abort
from . import tools_bp
from .forms import BuyBorrowDieForm
from services.borrow_service import BorrowInputs, BorrowService


TOOLS = [
    {
        'slug': 'strategy-comparison',
        'title': 'Strategy Comparison',
        'description': 'Compare different investment strategies and their potential outcomes over time.',
        'available': False,
    },
    {
        'slug': 'buy-borrow-die',
        'title': 'Buy, Borrow, Die',
        'description': 'Analyze the tax-efficient strategy of borrowing against appreciating assets.',
        'available': True,
    },
    {
        'slug': 'income-from-assets',
        'title': 'Income from Assets',
        'description': 'Calculate potential income streams from various asset classes and investments.',
        'available': False,
    },
    {
        'slug': 'selling-assets',
        'title': 'Selling Assets',
        'description': 'Plan and optimize the sale of assets with tax implications in mind.',
        'available': False,
    },
    {
        'slug': 'retirement-calculator',
        'title': 'Retirement Calculator',
        'description': 'Project your retirement needs and analyze different savings strategies.',
        'available': False,
    },
]


@tools_bp.route('/')
def index():
    """List of calculators"""
    return render_template('tools/index.html', tools=TOOLS)


@tools_bp.route('/buy-borrow-die', methods=['GET', 'POST'])
def buy_borrow_die():
    """Yearly table of borrowing against an appreciating asset"""
    form = BuyBorrowDieForm()
    results = []
    breach = None

    if form.validate_on_submit():
        inputs = BorrowInputs(
            current_asset_value=form.current_asset_value.data,
            expected_annual_return=form.expected_annual_return.data,
            target_ltv=form.loan_to_value_ratio.data,
            interest_rate=form.interest_rate.data,
            mode=form.calculation_mode.data,
            annual_borrow_rate=form.desired_annual_borrow_rate.data or 0.0,
            monthly_income=form.desired_monthly_income.data or 0.0,
            adjust_for_inflation=form.adjust_for_inflation.data,
            inflation_rate=form.inflation_rate.data or 0.0,
        )
        results = BorrowService.calculate(inputs, current_app.config['BORROW_PROJECTION_YEARS'])
        breach = BorrowService.first_breach(results)

    return render_template('tools/buy_borrow_die.html', form=form, results=results, breach=breach)


@tools_bp.route('/<slug>')
def tool(slug):
    """Placeholder page for calculators that are not built yet"""
    for item in TOOLS:
        if item['slug'] == slug:
            return render_template('tools/coming_soon.html', tool=item)
    abort(404)
