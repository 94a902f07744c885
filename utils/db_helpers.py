"""
Helpers for reaching the signed-in user's records.

All data in this application is scoped to a User.  Routes should go through
``user_store()`` so that one user can never read another user's slots.

Usage
-----
In any blueprint route::

    from utils.db_helpers import user_store

    store = user_store()
    transactions = store.load_transactions()
"""

from flask import current_app, abort
from flask_login import current_user

from services.record_store import create_record_store


def get_user_id():
    """Return ``current_user.id``, or ``None`` if not authenticated."""
    if current_user.is_authenticated:
        return current_user.id
    return None


def record_store_for(user_id):
    """Return the configured record store for *user_id*."""
    backend = current_app.config.get('RECORD_STORE_BACKEND', 'sql')
    memory = current_app.extensions.setdefault('record_store_memory', {})
    return create_record_store(
        backend,
        user_id,
        directory=current_app.config.get('RECORD_STORE_PATH'),
        memory=memory,
    )


def user_store():
    """Record store of the current user; aborts 401 when nobody is signed in."""
    user_id = get_user_id()
    if user_id is None:
        abort(401)
    return record_store_for(user_id)
