from datetime import datetime, timedelta

import jwt
from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import generate_password_hash, check_password_hash

from aulas.extensions import db
from aulas.models import User
from aulas.models.user import normalize_role
from aulas.services._helpers import require_fields
from aulas.utils.errors import AuthError, ConflictError, StoreError


class AuthService:

    @staticmethod
    def hash_password(password):
        return generate_password_hash(password, method=current_app.config['PASSWORD_HASH_METHOD'])

    @staticmethod
    def register(name, email, password, role=None):
        """
        Create a user account.
        The email is compared after trimming and is case-sensitive.
        """
        require_fields({'name': name, 'email': email, 'password': password},
                       'name', 'email', 'password')
        email = str(email).strip()

        if User.query.filter_by(email=email).first():
            raise ConflictError('Email already registered')

        user = User(
            name=str(name).strip(),
            email=email,
            password_hash=AuthService.hash_password(str(password)),
            role=normalize_role(role)
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration for the same email
            db.session.rollback()
            raise ConflictError('Email already registered')
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception("Error registering user")
            raise StoreError()

        current_app.logger.info(f"Registered user {user.id} with role {user.role}")
        return user

    @staticmethod
    def login(email, password):
        """Return the user matching the credentials or raise AuthError."""
        email = str(email).strip() if email is not None else ''
        user = User.query.filter_by(email=email).first() if email else None

        if not user or not check_password_hash(user.password_hash, str(password or '')):
            current_app.logger.warning("Failed login attempt")
            raise AuthError()
        return user

    @staticmethod
    def issue_token(user):
        return jwt.encode({
            'user_id': user.id,
            'role': user.role,
            'exp': datetime.utcnow() + timedelta(hours=current_app.config['TOKEN_TTL_HOURS'])
        }, current_app.config['SECRET_KEY'], algorithm="HS256")

    @staticmethod
    def user_from_token(token):
        try:
            data = jwt.decode(token, current_app.config['SECRET_KEY'], algorithms=["HS256"])
        except jwt.InvalidTokenError:
            raise AuthError('Token is invalid')
        user_id = data.get('user_id')
        user = db.session.get(User, user_id) if user_id is not None else None
        if not user:
            raise AuthError('Token is invalid')
        return user
