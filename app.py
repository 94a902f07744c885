import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask
from flask_login import user_logged_in, user_logged_out
from flask_wtf.csrf import CSRFError
from config import config
from extensions import db, migrate, login_manager, csrf, limiter
from utils.formatting import format_currency, format_percent


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = RotatingFileHandler(
            'logs/moneyboard.log',
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Moneyboard Finance startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        app.logger.info('Moneyboard Finance startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # Configure Flask-Login
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'info'

    @login_manager.user_loader
    def load_user(user_id):
        from models.users import User
        return db.session.get(User, int(user_id))

    # Import models to ensure they're registered with SQLAlchemy
    with app.app_context():
        import models

    # Register blueprints
    from blueprints.auth import auth_bp
    from blueprints.dashboard import dashboard_bp
    from blueprints.tracker import tracker_bp
    from blueprints.networth import networth_bp
    from blueprints.planning import planning_bp
    from blueprints.tools import tools_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(tracker_bp)
    app.register_blueprint(networth_bp)
    app.register_blueprint(planning_bp)
    app.register_blueprint(tools_bp)

    # Jinja2 filters for money and rates
    app.add_template_filter(format_currency, 'currency')
    app.add_template_filter(format_percent, 'percent')

    @app.context_processor
    def utility_processor():
        from datetime import date
        return dict(current_year=date.today().year)

    # Sign-in events
    @user_logged_in.connect_via(app)
    def _log_login(sender, user, **extra):
        sender.logger.info(f'User {user.id} signed in')

    @user_logged_out.connect_via(app)
    def _log_logout(sender, user, **extra):
        if user is not None and getattr(user, 'is_authenticated', False):
            sender.logger.info(f'User {user.id} signed out')

    # Create database tables
    with app.app_context():
        db.create_all()

    register_error_handlers(app)
    register_commands(app)

    return app


def register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(404)
    def not_found_error(error):
        from flask import render_template
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        from flask import render_template
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return render_template('errors/500.html'), 500

    @app.errorhandler(403)
    def forbidden_error(error):
        from flask import render_template
        return render_template('errors/403.html'), 403

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        from flask import render_template, flash
        flash('CSRF token validation failed. Please try again.', 'danger')
        return render_template('errors/csrf.html', reason=error.description), 400


def register_commands(app):
    """Register Flask CLI commands."""

    @app.cli.group()
    def users():
        """Manage user accounts."""
        pass

    @users.command('create')
    @click.argument('email')
    @click.option('--name', prompt='Full name', help='Display name of the user.')
    @click.password_option()
    def create_user(email, name, password):
        """Create a user account for EMAIL."""
        from models.users import User
        from blueprints.auth.forms import validate_password_strength

        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            click.echo(f'ERROR: A user with email "{email}" already exists', err=True)
            return
        is_valid, error = validate_password_strength(password)
        if not is_valid:
            click.echo(f'ERROR: {error}', err=True)
            return

        user = User(email=email, name=name.strip(), is_active=True)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        app.logger.info(f'User {user.id} created from the command line')
        click.echo(f'SUCCESS: "{user.name}" ({email}) created.')

    @users.command('list')
    def list_users():
        """List all user accounts."""
        from models.users import User
        accounts = User.query.order_by(User.id).all()
        if not accounts:
            click.echo('No users found.')
            return
        click.echo(f'{"ID":<5} {"Name":<25} {"Email":<40} {"Active":<8}')
        click.echo('-' * 80)
        for u in accounts:
            click.echo(f'{u.id:<5} {u.name:<25} {u.email:<40} {str(u.is_active):<8}')

    @users.command('deactivate')
    @click.argument('email')
    def deactivate_user(email):
        """Stop EMAIL from signing in; their records are kept."""
        from models.users import User
        user = User.query.filter_by(email=email.strip().lower()).first()
        if not user:
            click.echo(f'ERROR: No user found with email "{email}"', err=True)
            return
        if not user.is_active:
            click.echo(f'"{user.name}" ({user.email}) is already inactive.')
            return
        user.is_active = False
        db.session.commit()
        click.echo(f'SUCCESS: "{user.name}" ({user.email}) deactivated.')


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    # Never use 0.0.0.0 with debug mode - it exposes the debugger to the network
    app.run(host='127.0.0.1', port=5000, debug=True)
