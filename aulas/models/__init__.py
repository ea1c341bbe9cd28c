from aulas.models.user import User
from aulas.models.room import Room
from aulas.models.resource import Resource
from aulas.models.reservation import Reservation
from aulas.models.damage_report import DamageReport

__all__ = ['User', 'Room', 'Resource', 'Reservation', 'DamageReport']
