import sqlite3

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from padel_api.config import config, DEFAULT_SECRET_KEY
from padel_api.errors import ApiError, ConflictError, InternalError

db = SQLAlchemy()


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; enrollment relies on it.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


def _parse_allowed_origins(raw_origins):
    if not raw_origins:
        return '*'

    if isinstance(raw_origins, (list, tuple, set)):
        cleaned = [origin for origin in raw_origins if origin]
        return cleaned or '*'

    raw_text = str(raw_origins).strip()
    if not raw_text or raw_text == '*':
        return '*'

    origins = [origin.strip() for origin in raw_text.split(',') if origin.strip()]
    return origins or '*'


def _register_error_handlers(app):
    @app.errorhandler(ApiError)
    def _handle_api_error(error):
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error):
        message = 'Route not found' if error.code == 404 else error.name
        response = jsonify({'error': message})
        response.status_code = error.code
        # Keep headers such as Allow on 405; the body is ours.
        for name, value in error.get_headers():
            if name.lower() != 'content-type':
                response.headers[name] = value
        return response

    @app.errorhandler(IntegrityError)
    def _handle_integrity_error(error):
        db.session.rollback()
        app.logger.warning('Integrity error reached request boundary: %s', error.orig)
        return jsonify({'error': ConflictError.default_message}), ConflictError.status_code

    @app.errorhandler(Exception)
    def _handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception('Unhandled error')
        return jsonify({'error': InternalError.default_message}), InternalError.status_code


def _register_service_routes(app):
    @app.route('/')
    def index():
        return 'Padel tournaments API is running'

    @app.route('/health')
    def health():
        return jsonify({'ok': True})

    if not app.config.get('EXPOSE_DIAGNOSTICS'):
        return

    @app.route('/db-test')
    def db_test():
        now = db.session.execute(text('SELECT CURRENT_TIMESTAMP')).scalar()
        return jsonify({'success': True, 'time': str(now)})


def create_app(config_name='development'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _parse_allowed_origins(app.config.get('CORS_ALLOWED_ORIGINS', '*'))
    if str(config_name).strip().lower() == 'production':
        secret_key = str(app.config.get('SECRET_KEY') or '').strip()
        if not secret_key or secret_key == DEFAULT_SECRET_KEY:
            raise RuntimeError('SECRET_KEY must be set to a non-default value in production')
        if allowed_origins == '*':
            raise RuntimeError('CORS_ALLOWED_ORIGINS must be explicitly set in production')

    db.init_app(app)
    CORS(app, resources={r'/*': {'origins': allowed_origins}})

    from padel_api.routes.auth import auth_bp
    from padel_api.routes.players import players_bp
    from padel_api.routes.tournaments import tournaments_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(players_bp, url_prefix='/players')
    app.register_blueprint(tournaments_bp, url_prefix='/tournaments')

    _register_service_routes(app)
    _register_error_handlers(app)

    with app.app_context():
        from padel_api import models  # noqa: F401
        db.create_all()

    return app
