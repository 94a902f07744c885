"""Planning budget pages."""
from flask import Blueprint
from flask_login import login_required

planning_bp = Blueprint('planning', __name__, template_folder='templates')

# Require authentication for all routes in this blueprint
@planning_bp.before_request
@login_required
def require_login():
    pass

from . import routes
