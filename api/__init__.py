from flask import Flask
from flasgger import Swagger
from flask_cors import CORS
import logging

from .config import get_config
from .errors import register_error_handlers
from models import storage  # DBStorage singleton (scoped_session)
from services.auth_service import AuthGateway
from utils.decorators import authenticate_request

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0",
    "info": {
        "title": "Expense Tracker API",
        "version": "1.0.0",
        "description": "Personal finance tracker: per-user expenses and incomes behind bearer-token authentication.",
    },
    "basePath": "/",  # blueprints are mounted under /api/v1
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_name: str | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    if (
        app.config["REQUIRE_STRONG_SECRET"]
        and app.config["JWT_SECRET"] == app.config["DEFAULT_JWT_SECRET"]
    ):
        raise RuntimeError("JWT_SECRET must be set in production")

    configure_logging(app)

    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", [])}},
        supports_credentials=True,
        max_age=3600,
    )

    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    # One gateway per app; signing key and lifetimes come from config
    app.extensions["auth_gateway"] = AuthGateway.from_config(storage, app.config)
    app.before_request(authenticate_request)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .expenses import bp as expenses_bp
    from .incomes import bp as incomes_bp

    app.register_blueprint(health_bp, url_prefix="/api/v1")
    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")
    app.register_blueprint(expenses_bp, url_prefix="/api/v1")
    app.register_blueprint(incomes_bp, url_prefix="/api/v1")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # scoped_session.remove() rolls back anything uncommitted and releases the connection
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Expense Tracker API",
            "docs": "/apidocs/",
            "health": "/api/v1/health",
        }, 200

    return app
