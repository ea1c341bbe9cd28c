from flask import Blueprint, request, jsonify
from aulas.services.damage_service import DamageReportService
from aulas.utils.errors import ServiceError

damage_reports_bp = Blueprint('damage_reports', __name__)


@damage_reports_bp.route('/damage-reports', methods=['POST'])
def report_damage():
    data = request.get_json(silent=True) or {}
    try:
        report = DamageReportService.report_damage(
            resource_id=data.get('resourceId'),
            description=data.get('description'),
            photo=data.get('photo')
        )
        return jsonify({'ok': True, 'id': report.id})
    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code
