from aulas.models import Room, Resource


class CatalogService:

    @staticmethod
    def list_rooms():
        return Room.query.order_by(Room.id.asc()).all()

    @staticmethod
    def list_resources(room_id):
        """Resources attached to a room. Unknown rooms simply have none."""
        return Resource.query.filter(Resource.room_id == room_id).order_by(Resource.id.asc()).all()
