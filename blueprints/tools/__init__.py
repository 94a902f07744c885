"""Free calculators; open to visitors without an account."""
from flask import Blueprint

tools_bp = Blueprint('tools', __name__, url_prefix='/tools', template_folder='templates')

from . import routes
