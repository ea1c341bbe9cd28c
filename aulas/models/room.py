from aulas.extensions import db

STATE_FREE = 'Free'
STATE_OCCUPIED = 'Occupied'


class Room(db.Model):
    __tablename__ = 'rooms'

    # Ids come from the campus catalog, never generated here
    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(128), nullable=False)
    module = db.Column(db.String(64), nullable=False)
    state = db.Column(db.String(20), nullable=False, default=STATE_FREE)
    occupied_by = db.Column(db.String(64), nullable=True)

    resources = db.relationship(
        'Resource', back_populates='room', cascade='all, delete-orphan',
        order_by='Resource.id'
    )
    reservations = db.relationship('Reservation', back_populates='room', lazy=True)

    def occupy(self, user_id):
        self.state = STATE_OCCUPIED
        self.occupied_by = str(user_id)

    def free(self):
        self.state = STATE_FREE
        self.occupied_by = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'module': self.module,
            'state': self.state,
            'occupied_by': self.occupied_by
        }
