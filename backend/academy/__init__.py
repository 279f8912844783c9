"""Language Academy - Application Factory."""
import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
# Default limits come from RATELIMIT_DEFAULT
limiter = Limiter(key_func=get_remote_address)


def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Make every table known to metadata
    from academy import models  # noqa: F401

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'Language Academy',
            'version': '1.0.0'
        })

    return app


def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from academy.api.auth import auth_bp
    from academy.api.availability import availability_bp
    from academy.api.curriculum import curriculum_bp
    from academy.api.feature_flags import feature_flags_bp
    from academy.api.progress import progress_bp
    from academy.api.rooms import rooms_bp
    from academy.api.schedules import schedules_bp
    from academy.api.staff_hours import staff_hours_bp
    from academy.utils.swagger import API_URL, SWAGGER_URL, generate_swagger_spec, get_swagger_blueprint

    # Auth
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Calendar
    app.register_blueprint(availability_bp, url_prefix='/api/availability')
    app.register_blueprint(schedules_bp, url_prefix='/api/schedules')
    app.register_blueprint(rooms_bp, url_prefix='/api/rooms')

    # Program and progress
    app.register_blueprint(curriculum_bp, url_prefix='/api/curriculum')
    app.register_blueprint(progress_bp, url_prefix='/api/progress')

    # Administration
    app.register_blueprint(staff_hours_bp, url_prefix='/api/staff-hours')
    app.register_blueprint(feature_flags_bp, url_prefix='/api/feature-flags')

    # Swagger UI
    @app.route(API_URL)
    def swagger_spec():
        """Serve Swagger/OpenAPI specification."""
        return jsonify(generate_swagger_spec())

    app.register_blueprint(get_swagger_blueprint(), url_prefix=SWAGGER_URL)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from werkzeug.exceptions import HTTPException

    from academy.utils.helpers import error_response, handle_error
    from academy.utils.validators import ValidationError

    @app.errorhandler(ValidationError)
    def validation_error(error):
        db.session.rollback()
        return error_response(str(error), 400)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return handle_error(error, 500)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response('Token has expired', 401)

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return error_response('Invalid token', 401)

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return error_response('Authorization token required', 401)


def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.getLogger('academy').setLevel(level)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        logging.getLogger('academy').addHandler(file_handler)

        app.logger.setLevel(level)
        app.logger.info('Language Academy startup')


def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command()
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command()
    def seed_db():
        """Seed database with demo data."""
        from academy.services.seed_service import SeedService

        try:
            SeedService.seed_all()
            click.echo('Database seeded successfully!')
        except Exception as e:
            db.session.rollback()
            raise click.ClickException(f'Error seeding database: {e}')

    @app.cli.command()
    def create_admin():
        """Create admin user."""
        email = click.prompt('Admin email')
        name = click.prompt('Admin name')
        password = click.prompt('Password', hide_input=True, confirmation_prompt=True)

        from academy.services.auth_service import AuthService

        user, error = AuthService.create_user(email, password, name, role='admin')
        if error:
            raise click.ClickException(error)
        click.echo(f'Admin user created: {user["email"]}')

    @app.cli.command()
    def recalculate_staff_hours():
        """Recompute weekly hours for every teacher and tutor."""
        from academy.services.staff_hours_service import StaffHoursService

        rows = StaffHoursService.recalculate()
        for row in rows:
            click.echo(f'{row.user.name}: {row.total_hours:.2f}h')
