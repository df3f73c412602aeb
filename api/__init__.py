from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from services.registry import ServiceRegistry
from utils.logging import configure_logging

# Exposes /swagger.json and the UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "Printing House API",
        "version": "1.0.0",
        "description": "REST API for books, authors, publishers, printing companies, contracts and printing jobs.",
    },
    "basePath": "/",  # blueprints are mounted under /api/v1
    "schemes": ["http"],
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,
            "model_filter": lambda tag: True,
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None, storage=None) -> Flask:
    """
    Application factory.

    `storage` defaults to the shared DBStorage from the models package; tests
    pass their own so each one runs against a fresh database.
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    configure_logging(app.config["LOG_LEVEL"])

    if storage is None:
        from models import storage

    origins = app.config.get("CORS_ORIGINS", "*")
    if origins != "*":
        origins = [o.strip() for o in origins.split(",") if o.strip()]
    CORS(app, resources={r"/*": {"origins": origins}})
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)
    register_error_handlers(app)

    app.extensions["services"] = ServiceRegistry(storage)

    from .health import bp as health_bp
    from .publishers import bp as publishers_bp
    from .authors import bp as authors_bp
    from .books import bp as books_bp
    from .printing_companies import bp as printing_companies_bp
    from .contracts import bp as contracts_bp
    from .printing_jobs import bp as printing_jobs_bp
    from .reports import bp as reports_bp

    for bp in (
        health_bp,
        publishers_bp,
        authors_bp,
        books_bp,
        printing_companies_bp,
        contracts_bp,
        printing_jobs_bp,
        reports_bp,
    ):
        app.register_blueprint(bp, url_prefix="/api/v1")

    # Release the scoped session at the end of every request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Printing House API",
            "docs": "/apidocs/",
            "health": "/api/v1/health",
        }, 200

    return app
