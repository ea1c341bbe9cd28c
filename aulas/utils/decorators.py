from functools import wraps
from flask import request, jsonify
from aulas.services.auth_service import AuthService
from aulas.utils.errors import AuthError


def token_required(f):
    """Resolve the bearer token to a User and pass it as the first view argument."""
    @wraps(f)
    def decorated(*args, **kwargs):
        token = None
        if 'Authorization' in request.headers:
            # Bearer <token>
            auth_header = request.headers['Authorization']
            if auth_header.startswith("Bearer "):
                token = auth_header.split(" ", 1)[1].strip()

        if not token:
            return jsonify({'error': 'Token is missing'}), 401

        try:
            current_user = AuthService.user_from_token(token)
        except AuthError as e:
            return jsonify({'error': e.message}), e.status_code

        return f(current_user, *args, **kwargs)

    return decorated
