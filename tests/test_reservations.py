import pytest
from aulas.extensions import db
from aulas.models import Room, Reservation
from aulas.services.auth_service import AuthService
from aulas.services.catalog_service import CatalogService
from aulas.services.reservation_service import ReservationService
from aulas.utils.errors import NotFoundError, StoreError, ValidationError


def test_list_rooms_ordered_by_id(app, init_data):
    db.session.add(Room(id=1, name='Aula 1', module='Module A'))
    db.session.commit()
    assert [r.id for r in CatalogService.list_rooms()] == [1, 4, 5]


def test_list_resources(app, init_data):
    _, room, room_empty = init_data
    codes = [r.code for r in CatalogService.list_resources(room.id)]
    assert codes == ['PRJ-5', 'PC-5-01']
    assert CatalogService.list_resources(room_empty.id) == []
    assert CatalogService.list_resources(999) == []


def test_create_reservation_occupies_room(app, init_data):
    reservation = ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")

    room = db.session.get(Room, 5)
    assert room.state == 'Occupied'
    assert room.occupied_by == '1'
    assert Reservation.query.count() == 1
    assert reservation.status == 'active'
    assert reservation.start == "2024-01-01T10:00"


def test_create_reservation_accepts_string_ids(app, init_data):
    ReservationService.create_reservation('5', '1', "2024-01-01T10:00", "2024-01-01T11:00")
    assert db.session.get(Room, 5).occupied_by == '1'


@pytest.mark.parametrize('field', ['room_id', 'user_id', 'start', 'end'])
def test_create_reservation_requires_fields(app, init_data, field):
    args = {'room_id': 5, 'user_id': 1, 'start': '2024-01-01T10:00', 'end': '2024-01-01T11:00'}
    args[field] = None
    with pytest.raises(ValidationError):
        ReservationService.create_reservation(**args)
    assert Reservation.query.count() == 0
    assert db.session.get(Room, 5).state == 'Free'


def test_create_reservation_rejects_non_numeric_id(app, init_data):
    with pytest.raises(ValidationError):
        ReservationService.create_reservation('five', 1, 'a', 'b')


def test_create_reservation_unknown_room(app, init_data):
    with pytest.raises(NotFoundError):
        ReservationService.create_reservation(999, 1, 'a', 'b')
    assert Reservation.query.count() == 0


def test_double_booking_is_allowed(app, init_data):
    AuthService.register('Bruno', 'bruno@test.com', 'secret')
    ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")
    ReservationService.create_reservation(5, 2, "2024-01-01T10:00", "2024-01-01T11:00")

    assert Reservation.query.filter_by(room_id=5, status='active').count() == 2
    assert db.session.get(Room, 5).occupied_by == '2'


def test_release_reservation_frees_room(app, init_data):
    reservation = ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")
    ReservationService.release_reservation(reservation.id)

    db.session.expire_all()
    assert db.session.get(Reservation, reservation.id).status == 'finished'
    room = db.session.get(Room, 5)
    assert room.state == 'Free'
    assert room.occupied_by is None


def test_release_unknown_reservation(app, init_data):
    ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")
    with pytest.raises(NotFoundError):
        ReservationService.release_reservation(12345)

    assert db.session.get(Room, 5).state == 'Occupied'
    assert Reservation.query.filter_by(status='active').count() == 1


def test_release_is_atomic(app, init_data, monkeypatch):
    reservation = ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")

    def failing_commit(*args, **kwargs):
        from sqlalchemy.exc import OperationalError
        raise OperationalError('UPDATE rooms', {}, Exception('disk I/O error'))

    monkeypatch.setattr(db.session(), 'commit', failing_commit)
    with pytest.raises(StoreError):
        ReservationService.release_reservation(reservation.id)
    monkeypatch.undo()

    db.session.expire_all()
    assert db.session.get(Reservation, reservation.id).status == 'active'
    room = db.session.get(Room, 5)
    assert room.state == 'Occupied'
    assert room.occupied_by == '1'


def test_create_reservation_unknown_user(app, init_data):
    with pytest.raises(NotFoundError, match='User'):
        ReservationService.create_reservation(5, 999, 'a', 'b')
    assert Reservation.query.count() == 0
    assert db.session.get(Room, 5).state == 'Free'


def test_release_twice_keeps_newer_booking(app, init_data):
    AuthService.register('Bruno', 'bruno@test.com', 'secret')
    first = ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")
    ReservationService.release_reservation(first.id)
    ReservationService.create_reservation(5, 2, "2024-01-01T12:00", "2024-01-01T13:00")

    ReservationService.release_reservation(first.id)

    db.session.expire_all()
    room = db.session.get(Room, 5)
    assert (room.state, room.occupied_by) == ('Occupied', '2')
    assert db.session.get(Reservation, first.id).status == 'finished'


def test_release_hands_room_to_remaining_active_booking(app, init_data):
    AuthService.register('Bruno', 'bruno@test.com', 'secret')
    first = ReservationService.create_reservation(5, 1, "2024-01-01T10:00", "2024-01-01T11:00")
    second = ReservationService.create_reservation(5, 2, "2024-01-01T10:00", "2024-01-01T11:00")

    ReservationService.release_reservation(second.id)
    db.session.expire_all()
    room = db.session.get(Room, 5)
    assert (room.state, room.occupied_by) == ('Occupied', '1')

    ReservationService.release_reservation(first.id)
    db.session.expire_all()
    room = db.session.get(Room, 5)
    assert (room.state, room.occupied_by) == ('Free', None)
