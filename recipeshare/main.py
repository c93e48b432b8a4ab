import logging

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

# .env must be loaded before config reads the environment
load_dotenv()

from recipeshare import config  # noqa: E402
from recipeshare.api import api  # noqa: E402

# Room for form fields and multipart boundaries on top of the two files
FORM_OVERHEAD_BYTES = 1024 * 1024


def create_app() -> Flask:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = 2 * config.max_upload_bytes() + FORM_OVERHEAD_BYTES

    app.register_blueprint(api, url_prefix="/api")

    @app.route("/", methods=["GET"])
    def home():
        return "recipeshare API running"

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        logging.warning("[UPLOAD REJECTED] body over %s bytes", app.config["MAX_CONTENT_LENGTH"])
        return jsonify({
            "success": False,
            "error": "Upload too large",
            "details": (
                f"The request body must be at most {app.config['MAX_CONTENT_LENGTH']} bytes "
                f"(two files of {config.max_upload_bytes()} bytes plus form fields)"
            ),
        }), 413

    return app


# ================================
# START
# ================================
if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=config.PORT)
