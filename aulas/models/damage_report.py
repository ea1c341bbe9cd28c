from aulas.extensions import db
from datetime import datetime

STATUS_REPORTED = 'reported'


class DamageReport(db.Model):
    __tablename__ = 'damage_reports'

    id = db.Column(db.Integer, primary_key=True)
    resource_id = db.Column(db.Integer, db.ForeignKey('resources.id'), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    photo = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=STATUS_REPORTED)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    resource = db.relationship('Resource', back_populates='damage_reports')

    def to_dict(self):
        return {
            'id': self.id,
            'resource_id': self.resource_id,
            'description': self.description,
            'photo': self.photo,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
