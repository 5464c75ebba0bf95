import logging
import os

from flask import Flask, send_file, send_from_directory, current_app
from flask_swagger_ui import get_swaggerui_blueprint

from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .content_store.auth import register_auth_callbacks
from .content_store import storage
from .errors import register_error_handlers
from .cli import register_commands


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))
    logging.getLogger("docfolio").setLevel(app.logger.level)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_auth_callbacks(jwt)

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Public media (blob storage)
    # -------------------------------------------------
    @app.route(f"{app.config['MEDIA_URL_PREFIX'].rstrip('/')}/<path:path>", methods=["GET"], endpoint="media")
    def serve_media(path):
        return send_from_directory(storage.upload_folder(), path)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/docfolio.yaml", methods=["GET"], endpoint="openapi_docfolio")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "openapi",
            "docfolio.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("docfolio.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/docfolio.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "docfolio API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
