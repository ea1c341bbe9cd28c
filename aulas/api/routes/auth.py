from flask import Blueprint, request, jsonify
from aulas.services.auth_service import AuthService
from aulas.utils.decorators import token_required
from aulas.utils.errors import ServiceError

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    try:
        AuthService.register(
            name=data.get('name'),
            email=data.get('email'),
            password=data.get('password'),
            role=data.get('role')
        )
        return jsonify({'ok': True})
    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code


@auth_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    try:
        user = AuthService.login(data.get('email'), data.get('password'))
    except ServiceError as e:
        return jsonify({'error': e.message}), e.status_code

    return jsonify({
        'ok': True,
        'user': user.to_public_dict(),
        'token': AuthService.issue_token(user)
    })


@auth_bp.route('/me', methods=['GET'])
@token_required
def me(current_user):
    return jsonify({'ok': True, 'user': current_user.to_public_dict()})
