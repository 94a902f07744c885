from extensions import db
from datetime import datetime, timezone


class RecordSlot(db.Model):
    """One named JSON document per user (transactions, budget, net worth...)."""
    __tablename__ = 'record_slots'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'key', name='uq_record_slots_user_key'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    key = db.Column(db.String(100), nullable=False)
    payload = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None), onupdate=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    def __repr__(self):
        return f'<RecordSlot user={self.user_id} key={self.key}>'
