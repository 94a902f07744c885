# Models package - Import all models for Flask-SQLAlchemy

from models.record_slot import RecordSlot
from models.users import User

__all__ = [
    'RecordSlot',
    'User',
]
