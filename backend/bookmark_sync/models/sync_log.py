"""
New sync log model

One row per successfully created sync, used only for daily quota accounting.
"""
from ..extensions import db
from ..utils.timeutils import to_iso_utc


class NewSyncLog(db.Model):
    """Creation event for a new sync, expires at the next local midnight"""
    __tablename__ = 'new_sync_logs'

    id = db.Column(db.String(32), primary_key=True)
    ip_address = db.Column(db.String(64), nullable=False, index=True)
    sync_created = db.Column(db.DateTime, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'ipAddress': self.ip_address,
            'syncCreated': to_iso_utc(self.sync_created),
            'expiresAt': to_iso_utc(self.expires_at),
        }

    def __repr__(self):
        return f'<NewSyncLog {self.ip_address} {self.sync_created}>'
