import pytest
from aulas import create_app, db
from aulas.config import TestingConfig
from aulas.models import Room, Resource
from aulas.services.auth_service import AuthService


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def init_data(app):
    user = AuthService.register('Ana Torres', 'ana@test.com', 'secret', 'instructor')
    room_empty = Room(id=4, name='Aula 4', module='Module A')
    room = Room(id=5, name='Aula 5', module='Module B')
    projector = Resource(room=room, type='Projector', code='PRJ-5')
    computer = Resource(room=room, type='Computer', code='PC-5-01')
    db.session.add_all([room_empty, room, projector, computer])
    db.session.commit()
    return user, room, room_empty
