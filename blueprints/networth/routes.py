from flask import render_template, request, redirect, url_for, flash, jsonify
from . import networth_bp
from .forms import NetWorthForm
from models.records import ASSET_CATEGORIES, LIABILITY_CATEGORIES
from services.networth_service import NetWorthService
from utils.db_helpers import user_store


@networth_bp.route('/networth')
def index():
    """Net worth history, latest entry and category breakdown"""
    entries = NetWorthService.get_entries(user_store())
    latest = entries[0] if entries else None

    return render_template('networth/index.html',
                           form=NetWorthForm(),
                           entries=entries,
                           latest=latest,
                           chart=NetWorthService.chart_series(entries),
                           asset_breakdown=NetWorthService.category_breakdown(latest.assets) if latest else [],
                           liability_breakdown=NetWorthService.category_breakdown(latest.liabilities) if latest else [],
                           asset_categories=ASSET_CATEGORIES,
                           liability_categories=LIABILITY_CATEGORIES)


@networth_bp.route('/networth/entries', methods=['POST'])
def save_entry():
    """Create today's entry, or add to it if one already exists"""
    form = NetWorthForm()
    if not form.validate_on_submit():
        errors = '; '.join(err for errs in form.errors.values() for err in errs)
        flash(f'Entry not saved: {errors}', 'danger')
        return redirect(url_for('networth.index'))

    try:
        if form.mode.data == 'breakdown':
            assets = NetWorthService.parse_line_items(
                request.form.getlist('asset_category'),
                request.form.getlist('asset_amount'),
                request.form.getlist('asset_custom'),
                ASSET_CATEGORIES,
            )
            liabilities = NetWorthService.parse_line_items(
                request.form.getlist('liability_category'),
                request.form.getlist('liability_amount'),
                request.form.getlist('liability_custom'),
                LIABILITY_CATEGORIES,
            )
        else:
            assets, liabilities = NetWorthService.total_items(
                form.total_assets.data or 0, form.total_liabilities.data or 0
            )
    except ValueError as e:
        flash(f'Entry not saved: {e}', 'danger')
        return redirect(url_for('networth.index'))

    entry = NetWorthService.record_entry(user_store(), assets, liabilities, notes=form.notes.data)
    flash(f'Net worth for {entry.day} saved: {entry.net_worth:,.2f}', 'success')
    return redirect(url_for('networth.index'))


@networth_bp.route('/networth/<entry_id>/delete', methods=['POST'])
def delete_entry(entry_id):
    """Delete a net worth entry"""
    if NetWorthService.remove_entry(user_store(), entry_id):
        flash('Entry deleted successfully', 'success')
    else:
        flash('Entry not found', 'warning')
    return redirect(url_for('networth.index'))


@networth_bp.route('/networth/api/entries', methods=['GET'])
def api_entries():
    """Entries newest first as JSON"""
    entries = NetWorthService.get_entries(user_store())
    return jsonify([e.to_dict() for e in entries])
