"""
PDF to Images API Application Factory
"""
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from config import config
from pdf_images.exceptions import UploadTooLargeError, ValidationError
from pdf_images.services import PdfConverter, get_converter


def create_app(config_name: str = 'default', converter: Optional[PdfConverter] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    origins = app.config.get("CORS_ORIGINS", "*")
    if origins == "*":
        CORS(app, origins="*", send_wildcard=True)
    else:
        CORS(app, origins=[o.strip() for o in origins.split(",") if o.strip()])

    # Conversion strategy shared by all requests; strategies hold no request state
    converter = converter or get_converter(app.config)
    app.extensions["pdf_converter"] = converter
    ready, msg = converter.ready()
    if ready:
        app.logger.info("Using %s converter", converter.name)
    else:
        app.logger.warning("Converter %s is not ready: %s", converter.name, msg)

    # Register blueprints
    from pdf_images.api import api_bp
    app.register_blueprint(api_bp)

    register_error_handlers(app)
    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        app.logger.info("Rejected upload: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(e):
        err = UploadTooLargeError(app.config["MAX_UPLOAD_MB"])
        app.logger.info("Rejected upload: %s", err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return jsonify({"success": False, "error": e.description or e.name}), e.code
        app.logger.exception("Unhandled error")
        return jsonify({
            "success": False,
            "error": "Internal server error",
            "details": str(e),
        }), 500
