from flask import Blueprint, jsonify
from aulas.services.catalog_service import CatalogService

rooms_bp = Blueprint('rooms', __name__)


@rooms_bp.route('/rooms', methods=['GET'])
def list_rooms():
    rooms = CatalogService.list_rooms()
    return jsonify([r.to_dict() for r in rooms])


@rooms_bp.route('/rooms/<int(signed=True):room_id>/resources', methods=['GET'])
def list_resources(room_id):
    resources = CatalogService.list_resources(room_id)
    return jsonify([r.to_dict() for r in resources])
