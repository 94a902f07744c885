from flask import current_app, render_template, request
from . import dashboard_bp
from services.networth_service import NetWorthService
from services.projection_service import ProjectionService
from services.tracker_service import TrackerService
from utils.db_helpers import user_store


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
def index():
    """Averages, savings rate and projections from the tracked periods"""
    store = user_store()
    roi = ProjectionService.parse_roi(request.args.get('roi'), current_app.config['DEFAULT_ROI'])
    horizons = current_app.config['PROJECTION_HORIZONS']

    periods = TrackerService.aggregate_transactions(store.load_transactions())
    balance = store.load_current_balance()
    metrics = ProjectionService.calculate_metrics(periods, balance.amount if balance else 0.0)

    projections = []
    yearly_projections = []
    if metrics:
        projections = ProjectionService.project_horizons(metrics, roi, horizons)
        yearly_projections = ProjectionService.yearly_projections(
            metrics, roi, current_app.config['YEARLY_PROJECTION_YEARS']
        )

    # Net worth card: latest entry projected with the tracked savings
    latest_networth = NetWorthService.latest_entry(store.load_networth_entries())
    networth_projections = []
    if latest_networth:
        networth_projections = ProjectionService.networth_projections(
            latest_networth.net_worth,
            metrics.avg_savings if metrics else 0.0,
            roi,
            horizons,
        )

    return render_template('dashboard/index.html',
                           has_data=metrics is not None,
                           metrics=metrics,
                           roi=roi,
                           projections=projections,
                           yearly_projections=yearly_projections,
                           latest_networth=latest_networth,
                           networth_projections=networth_projections)
