from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from aulas.extensions import db
from aulas.models import Room, Reservation, User
from aulas.models.reservation import STATUS_ACTIVE, STATUS_FINISHED
from aulas.services._helpers import require_fields, to_int
from aulas.utils.errors import NotFoundError, StoreError


class ReservationService:
    """
    Owns the link between reservations and room occupancy.
    A room's state and occupied_by are only ever written from here, and always
    in the same commit as the reservation row that caused the change.
    """

    @staticmethod
    def create_reservation(room_id, user_id, start, end):
        require_fields({'roomId': room_id, 'userId': user_id, 'start': start, 'end': end},
                       'roomId', 'userId', 'start', 'end')
        room_id = to_int(room_id, 'roomId')
        user_id = to_int(user_id, 'userId')

        room = db.session.get(Room, room_id)
        if not room:
            raise NotFoundError('Room not found')
        if not db.session.get(User, user_id):
            raise NotFoundError('User not found')

        # Overlapping bookings are accepted, we only make them visible in the log
        already_active = Reservation.query.filter_by(room_id=room_id, status=STATUS_ACTIVE).count()
        if already_active:
            current_app.logger.warning(
                f"Room {room_id} already has {already_active} active reservation(s), booking anyway"
            )

        reservation = Reservation(
            room_id=room_id,
            user_id=user_id,
            start=str(start).strip(),
            end=str(end).strip(),
            status=STATUS_ACTIVE
        )
        db.session.add(reservation)
        room.occupy(user_id)
        ReservationService._commit("creating reservation")

        current_app.logger.info(f"Reservation {reservation.id}: room {room_id} occupied by user {user_id}")
        return reservation

    @staticmethod
    def release_reservation(reservation_id):
        reservation = db.session.get(Reservation, reservation_id)
        if not reservation:
            raise NotFoundError('Reservation not found')
        if reservation.status == STATUS_FINISHED:
            # Releasing twice must not free a room a newer booking holds
            return reservation

        reservation.status = STATUS_FINISHED
        room = db.session.get(Room, reservation.room_id)
        if room:
            latest = Reservation.query.filter(
                Reservation.room_id == room.id,
                Reservation.status == STATUS_ACTIVE,
                Reservation.id != reservation.id
            ).order_by(Reservation.id.desc()).first()
            if latest:
                room.occupy(latest.user_id)
            else:
                room.free()
        ReservationService._commit("releasing reservation")

        current_app.logger.info(
            f"Reservation {reservation.id} finished, room {reservation.room_id} is {room.state if room else 'gone'}"
        )
        return reservation

    @staticmethod
    def _commit(action):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception(f"Error {action}")
            raise StoreError()
