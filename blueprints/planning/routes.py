from flask import render_template, redirect, url_for, flash, abort
from . import planning_bp
from .forms import CostForm
from models.records import BUDGET_GROUPS, COST_KINDS
from services.planning_service import PlanningService
from utils.db_helpers import user_store


@planning_bp.route('/planning')
def index():
    """Needs and wants with their monthly-equivalent totals"""
    budget = user_store().load_planning_budget()
    return render_template('planning/index.html',
                           budget=budget,
                           summary=PlanningService.get_summary(budget),
                           groups=BUDGET_GROUPS,
                           form=CostForm())


@planning_bp.route('/planning/costs', methods=['POST'])
def save_cost():
    """Add a cost, or update one when cost_id is posted"""
    form = CostForm()
    if not form.validate_on_submit():
        errors = '; '.join(err for errs in form.errors.values() for err in errs)
        flash(f'Cost not saved: {errors}', 'danger')
        return redirect(url_for('planning.index'))

    store = user_store()
    budget = store.load_planning_budget()
    try:
        cost = PlanningService.save_cost(
            budget,
            form.group.data,
            form.kind.data,
            form.name.data,
            form.amount.data,
            frequency=form.frequency.data,
            cost_id=form.cost_id.data or None,
        )
    except ValueError as e:
        flash(f'Cost not saved: {e}', 'danger')
        return redirect(url_for('planning.index'))

    store.save_planning_budget(budget)
    action = 'updated' if form.cost_id.data else 'added'
    flash(f'"{cost.name}" {action}', 'success')
    return redirect(url_for('planning.index'))


@planning_bp.route('/planning/<group>/<kind>/<cost_id>/delete', methods=['POST'])
def delete_cost(group, kind, cost_id):
    """Delete a cost"""
    if group not in BUDGET_GROUPS or kind not in COST_KINDS:
        abort(404)

    store = user_store()
    budget = store.load_planning_budget()
    if PlanningService.delete_cost(budget, group, kind, cost_id):
        store.save_planning_budget(budget)
        flash('Cost deleted', 'success')
    else:
        flash('Cost not found', 'warning')
    return redirect(url_for('planning.index'))
