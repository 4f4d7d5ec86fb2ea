"""
Bookmarks sync model
"""
from ..extensions import db
from ..utils.timeutils import to_iso_utc


class Bookmarks(db.Model):
    """A sync record: an opaque (client-encrypted) bookmarks blob plus metadata"""
    __tablename__ = 'bookmarks'

    id = db.Column(db.String(32), primary_key=True)
    bookmarks = db.Column(db.Text, nullable=False, default='')
    version = db.Column(db.String(64))  # client schema version, last write wins

    created_at = db.Column(db.DateTime, nullable=False)
    last_updated = db.Column(db.DateTime, nullable=False)
    last_accessed = db.Column(db.DateTime, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'bookmarks': self.bookmarks,
            'version': self.version,
            'createdAt': to_iso_utc(self.created_at),
            'lastUpdated': to_iso_utc(self.last_updated),
            'lastAccessed': to_iso_utc(self.last_accessed),
        }

    def __repr__(self):
        return f'<Bookmarks {self.id}>'
