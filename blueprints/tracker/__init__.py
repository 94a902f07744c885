"""Income and expense tracker pages."""
from flask import Blueprint
from flask_login import login_required

tracker_bp = Blueprint('tracker', __name__, template_folder='templates')

# Require authentication for all routes in this blueprint
@tracker_bp.before_request
@login_required
def require_login():
    pass

from . import routes
