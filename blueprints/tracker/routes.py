from flask import Response, render_template, redirect, url_for, flash, jsonify
from . import tracker_bp
from .forms import TransactionForm, BalanceForm
from models.records import MONTHS
from services.tracker_service import TrackerService
from utils.db_helpers import user_store


def _form_errors(form):
    return '; '.join(err for errors in form.errors.values() for err in errors)


@tracker_bp.route('/tracker')
def index():
    """Monthly income/expense periods and the current balance"""
    store = user_store()
    transactions = store.load_transactions()
    periods = TrackerService.aggregate_transactions(transactions)

    last_period = TrackerService.get_last_period(store)
    form = TransactionForm(year=last_period.year, month=last_period.month)
    balance_form = BalanceForm()

    return render_template('tracker/index.html',
                           periods=periods,
                           transactions=list(reversed(transactions)),
                           transaction_count=len(transactions),
                           current_balance=store.load_current_balance(),
                           form=form,
                           balance_form=balance_form)


@tracker_bp.route('/tracker/transactions', methods=['POST'])
def add_transaction():
    """Add one income or expense amount"""
    form = TransactionForm()
    if not form.validate_on_submit():
        flash(f'Transaction not saved: {_form_errors(form)}', 'danger')
        return redirect(url_for('tracker.index'))

    try:
        txn = TrackerService.add_transaction(
            user_store(),
            year=form.year.data,
            month=form.month.data,
            txn_type=form.type.data,
            amount=form.amount.data,
        )
        flash(f'{txn.type} of {txn.amount:,.2f} added for {txn.month} {txn.year}', 'success')
    except ValueError as e:
        flash(f'Transaction not saved: {e}', 'danger')

    return redirect(url_for('tracker.index'))


@tracker_bp.route('/tracker/balance', methods=['POST'])
def set_balance():
    """Overwrite the current balance"""
    form = BalanceForm()
    if not form.validate_on_submit():
        flash(f'Balance not saved: {_form_errors(form)}', 'danger')
        return redirect(url_for('tracker.index'))

    balance = TrackerService.set_current_balance(user_store(), form.amount.data)
    flash(f'Current balance set for {balance.month} {balance.year}', 'success')
    return redirect(url_for('tracker.index'))


@tracker_bp.route('/tracker/transactions/<transaction_id>/delete', methods=['POST'])
def delete_transaction(transaction_id):
    """Delete a single transaction"""
    if TrackerService.delete_transaction(user_store(), transaction_id):
        flash('Transaction deleted', 'success')
    else:
        flash('Transaction not found', 'warning')
    return redirect(url_for('tracker.index'))


@tracker_bp.route('/tracker/<int:year>/<month>/delete', methods=['POST'])
def delete_period(year, month):
    """Delete every transaction in one month"""
    if month not in MONTHS:
        flash(f'Unknown month: {month}', 'danger')
        return redirect(url_for('tracker.index'))

    removed = TrackerService.delete_period(user_store(), year, month)
    if removed:
        flash(f'Deleted {removed} transactions for {month} {year}', 'success')
    else:
        flash(f'No transactions found for {month} {year}', 'warning')
    return redirect(url_for('tracker.index'))


@tracker_bp.route('/tracker/clear', methods=['POST'])
def clear():
    """Delete every transaction"""
    TrackerService.clear_transactions(user_store())
    flash('All transactions cleared', 'success')
    return redirect(url_for('tracker.index'))


@tracker_bp.route('/tracker/export')
def export():
    """Download transactions as CSV"""
    csv_text = TrackerService.export_csv(user_store().load_transactions())
    return Response(
        csv_text,
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=transactions.csv'},
    )


@tracker_bp.route('/tracker/api/periods')
def api_periods():
    """Aggregated periods as JSON"""
    periods = TrackerService.aggregate_transactions(user_store().load_transactions())
    return jsonify([p.to_dict() for p in periods])
