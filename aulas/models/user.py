from aulas.extensions import db

ROLES = ('admin', 'technician', 'instructor')
DEFAULT_ROLE = 'instructor'

# Labels used by older clients and the legacy CSV exports
LEGACY_ROLES = {
    'professor': 'instructor',
    'profesor': 'instructor',
    'tecnico': 'technician',
    'técnico': 'technician',
}


def normalize_role(role):
    """Map any incoming role label onto one of ``ROLES``."""
    value = str(role or '').strip().lower()
    value = LEGACY_ROLES.get(value, value)
    if value not in ROLES:
        return DEFAULT_ROLE
    return value


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=DEFAULT_ROLE)

    reservations = db.relationship('Reservation', back_populates='user', lazy=True)

    def to_public_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'email': self.email
        }
