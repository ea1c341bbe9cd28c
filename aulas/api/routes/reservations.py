from flask import Blueprint, request, jsonify
from aulas.services.reservation_service import ReservationService
from aulas.utils.errors import ServiceError

reservations_bp = Blueprint('reservations', __name__)


@reservations_bp.route('/reservations', methods=['POST'])
def create_reservation():
    data = request.get_json(silent=True) or {}
    try:
        reservation = ReservationService.create_reservation(
            room_id=data.get('roomId'),
            user_id=data.get('userId'),
            start=data.get('start'),
            end=data.get('end')
        )
        return jsonify({'ok': True, 'id': reservation.id})
    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code


@reservations_bp.route('/reservations/<int:reservation_id>/release', methods=['POST'])
def release_reservation(reservation_id):
    try:
        ReservationService.release_reservation(reservation_id)
        return jsonify({'ok': True})
    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
