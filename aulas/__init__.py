import click
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from aulas.config import DevelopmentConfig
from aulas.extensions import db, migrate


def create_app(config_class=DevelopmentConfig):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Register Blueprints
    from aulas.api.routes.auth import auth_bp
    from aulas.api.routes.rooms import rooms_bp
    from aulas.api.routes.reservations import reservations_bp
    from aulas.api.routes.damage_reports import damage_reports_bp

    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(rooms_bp, url_prefix='/api')
    app.register_blueprint(reservations_bp, url_prefix='/api')
    app.register_blueprint(damage_reports_bp, url_prefix='/api')

    @app.route('/api/health')
    def health():
        return {"status": "ok", "app": "Aulas"}

    register_error_handlers(app)
    register_commands(app)

    if not app.config.get('SECRET_KEY'):
        raise RuntimeError("SECRET_KEY must be set")

    return app


def bootstrap(app):
    """
    Create the tables and seed an empty database before serving.
    Called from the serving entry point only, never from CLI commands.
    """
    if not app.config['SEED_ON_STARTUP']:
        return None
    from aulas.services.seed_service import SeedService
    with app.app_context():
        db.create_all()
        return SeedService.seed_if_empty()


def register_error_handlers(app):

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if not request.path.startswith('/api'):
            return e
        return jsonify({'error': e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        app.logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({'error': 'Server Error'}), 500


def register_commands(app):
    from aulas.services.seed_service import SeedService

    @app.cli.command('seed')
    @click.option('--data-dir', default=None, help='Directory holding the seed CSV files.')
    def seed_command(data_dir):
        """Create the tables and import the seed CSVs into an empty database."""
        db.create_all()
        report = SeedService.seed_if_empty(data_dir)
        for row in report.skipped:
            click.echo(f"skipped {row.source} line {row.line}: {row.reason}")
        click.echo(report.summary())
