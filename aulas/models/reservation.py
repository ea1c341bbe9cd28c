from aulas.extensions import db

STATUS_ACTIVE = 'active'
STATUS_FINISHED = 'finished'


class Reservation(db.Model):
    __tablename__ = 'reservations'

    id = db.Column(db.Integer, primary_key=True)
    room_id = db.Column(db.Integer, db.ForeignKey('rooms.id'), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    # Stored as sent by the client, no overlap checks are made on them
    start = db.Column(db.String(32), nullable=False)
    end = db.Column(db.String(32), nullable=False)

    status = db.Column(db.String(20), nullable=False, default=STATUS_ACTIVE)  # active, finished

    room = db.relationship('Room', back_populates='reservations')
    user = db.relationship('User', back_populates='reservations')

    def to_dict(self):
        return {
            'id': self.id,
            'room_id': self.room_id,
            'user_id': self.user_id,
            'start': self.start,
            'end': self.end,
            'status': self.status
        }
