from aulas.extensions import db

STATUS_ACTIVE = 'Active'


class Resource(db.Model):
    __tablename__ = 'resources'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(
        db.Integer, db.ForeignKey('rooms.id', ondelete='CASCADE'), nullable=False, index=True
    )
    type = db.Column(db.String(64), nullable=False)
    code = db.Column(db.String(64), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=STATUS_ACTIVE)

    room = db.relationship('Room', back_populates='resources')
    damage_reports = db.relationship('DamageReport', back_populates='resource', lazy=True)

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'type': self.type,
            'code': self.code,
            'status': self.status
        }
