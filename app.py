# This file defines the main entry point and structure for the library account area Flask web application.
# It utilizes the Application Factory pattern (`create_app`) to initialize and configure the app.
# Key responsibilities include:
# - Creating the Flask application instance.
# - Setting up basic configuration (like the secret key) from settings.yaml.
# - Determining and configuring the absolute data folder path using `core.utils.get_data_folder_path`.
# - Centralizing logging configuration (File and Console handlers).
# - Registering Blueprints (`myresearch_bp`, `api_bp`) from the `views` directory.
# - Registering the context processor that exposes the account menu to templates.
# - Providing a conditional block (`if __name__ == '__main__':`) to run the development server.

from flask import Flask, redirect, url_for
import os
import logging
from logging.handlers import RotatingFileHandler

from core.settings_loader import get_app_config
from core.utils import get_data_folder_path


def configure_logging(app: Flask) -> None:
    """Install rotating file and console handlers on the app and root loggers."""
    # Remove Flask's default handlers
    app.logger.handlers.clear()
    app.logger.setLevel(logging.DEBUG)

    log_formatter = logging.Formatter(
        "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
    )

    # File Handler (Rotating)
    log_file_path = os.path.join(app.instance_path, "app.log")
    max_log_size = 1024 * 1024 * 10  # 10 MB
    backup_count = 5
    try:
        file_handler = RotatingFileHandler(
            log_file_path, maxBytes=max_log_size, backupCount=backup_count
        )
        file_handler.setFormatter(log_formatter)
        file_handler.setLevel(logging.DEBUG)
        app.logger.addHandler(file_handler)
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(logging.DEBUG)
        app.logger.info(f"File logging configured to: {log_file_path} (Level: DEBUG)")
    except OSError as e:
        app.logger.error(
            f"Failed to configure file logging to {log_file_path}: {e}", exc_info=True
        )

    # Console Handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.DEBUG)
    app.logger.addHandler(console_handler)
    logging.getLogger().addHandler(console_handler)

    app.logger.info("Centralized logging configured (File & Console).")


def create_app(test_config=None) -> Flask:
    """Factory function to create and configure the Flask app."""
    app = Flask(__name__, instance_relative_config=True)

    app_cfg = get_app_config()
    app.config.from_mapping(
        SECRET_KEY=app_cfg.get("secret_key", "dev"),  # CHANGE for production!
    )
    app.config.from_object("config")
    if test_config:
        app.config.update(test_config)

    # Ensure the instance folder exists (needed for logging)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError as e:
        app.logger.error(
            f"Could not create instance folder at {app.instance_path}: {e}",
            exc_info=True,
        )

    configure_logging(app)

    # --- Determine and set the Data Folder Path ---
    if not app.config.get("DATA_FOLDER"):
        app.config["DATA_FOLDER"] = get_data_folder_path(app_root_path=app.root_path)
    app.logger.info(f"Data folder path set to: {app.config['DATA_FOLDER']}")

    # --- Register Blueprints ---
    try:
        from views.myresearch_views import myresearch_bp
        from views.api_views import api_bp
        from views.view_helpers import inject_account_menu
    except ImportError as imp_err:
        app.logger.error(f"Blueprint import failed: {imp_err}", exc_info=True)
        raise

    app.register_blueprint(myresearch_bp)
    app.register_blueprint(api_bp)
    app.context_processor(inject_account_menu)

    app.logger.info("Registered Blueprints:")
    app.logger.info(f"- {myresearch_bp.name} (prefix: {myresearch_bp.url_prefix})")
    app.logger.info(f"- {api_bp.name} (prefix: {api_bp.url_prefix})")

    @app.route("/")
    def index():
        return redirect(url_for("myresearch.home"))

    return app


# --- Application Execution ---
if __name__ == "__main__":
    app = create_app()
    app.run(debug=True, host="0.0.0.0")
