"""
Authentication Routes
Sign in, sign up and sign out with lockout and rate limiting
"""
from flask import current_app, render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, current_user
from urllib.parse import urlparse
from datetime import datetime, timezone
from . import auth_bp
from .forms import LoginForm, SignupForm
from models.users import User
from extensions import db, limiter


def _safe_next(default_endpoint='dashboard.index'):
    """The ?next= target when it stays on this site, else *default_endpoint*."""
    next_page = request.args.get('next')
    if not next_page or urlparse(next_page).netloc != '':
        next_page = url_for(default_endpoint)
    return next_page


@auth_bp.route('/login', methods=['GET', 'POST'])
@limiter.limit("10 per minute")
def login():
    """User login page with security features"""
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    form = LoginForm()

    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        password = form.password.data
        remember = form.remember.data

        user = User.query.filter_by(email=email).first()

        if user:
            if user.is_locked():
                now = datetime.now(timezone.utc).replace(tzinfo=None)
                minutes_left = int((user.locked_until - now).total_seconds() / 60) + 1
                flash(f'Account temporarily locked due to multiple failed login attempts. Try again in {minutes_left} minutes.', 'danger')
                return render_template('auth/login.html', form=form)

            if not user.is_active:
                flash('This account has been deactivated. Please contact support.', 'danger')
                return render_template('auth/login.html', form=form)

            if user.check_password(password):
                login_user(user, remember=remember)
                user.update_last_login()
                user.reset_failed_logins()

                flash(f'Welcome back, {user.name}!', 'success')
                return redirect(_safe_next())

            user.record_failed_login()
            max_attempts = current_app.config.get('MAX_LOGIN_ATTEMPTS', 5)
            remaining = max(0, max_attempts - user.failed_login_attempts)
            if remaining > 0:
                flash(f'Invalid email or password. {remaining} attempts remaining before lockout.', 'danger')
            else:
                flash('Account locked due to too many failed attempts.', 'danger')
        else:
            # Generic error to prevent user enumeration
            flash('Invalid email or password.', 'danger')

    return render_template('auth/login.html', form=form)


@auth_bp.route('/signup', methods=['GET', 'POST'])
@limiter.limit("5 per minute")
def signup():
    """Create an account and sign straight in"""
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    form = SignupForm()

    if form.validate_on_submit():
        email = form.email.data.strip().lower()
        if User.query.filter_by(email=email).first():
            flash('An account with that email already exists.', 'danger')
            return render_template('auth/signup.html', form=form)

        user = User(email=email, name=form.name.data.strip(), is_active=True)
        user.set_password(form.password.data)
        db.session.add(user)
        db.session.commit()

        login_user(user)
        user.update_last_login()
        flash(f'Welcome, {user.name}! Your account is ready.', 'success')
        return redirect(url_for('dashboard.index'))

    return render_template('auth/signup.html', form=form)


@auth_bp.route('/logout')
def logout():
    """User logout"""
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
