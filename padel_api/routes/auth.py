from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from padel_api.app import db
from padel_api.auth_utils import generate_token
from padel_api.errors import ValidationError, AuthenticationError, ConflictError
from padel_api.models import User
from padel_api.request_utils import json_payload

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    data = json_payload()
    if not data.get('email') or not data.get('password') or not data.get('name'):
        raise ValidationError('email, password and name are required')

    email = str(data['email']).strip().lower()
    if User.query.filter_by(email=email).first():
        raise ConflictError('Email already registered')

    user = User(
        email=email,
        password_hash=generate_password_hash(str(data['password'])),
        name=str(data['name']).strip(),
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError('Email already registered')

    current_app.logger.info('Registered user %s', user.id)
    token = generate_token(user)
    return jsonify({'token': token, 'user': user.to_dict()})


@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_payload()
    if not data.get('email') or not data.get('password'):
        raise ValidationError('email and password are required')

    email = str(data['email']).strip().lower()
    user = User.query.filter_by(email=email).first()
    if not user or not check_password_hash(user.password_hash, str(data['password'])):
        raise AuthenticationError('Invalid email or password')

    token = generate_token(user)
    return jsonify({'token': token, 'user': user.to_dict()})
