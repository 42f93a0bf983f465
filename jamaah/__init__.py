"""Initialize the Flask app and its extensions."""

import json
import os

import firebase_admin
from firebase_admin import credentials
from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from .extensions import backend, mail

CREDENTIALS_FILE = "firebase_credentials.json"


def _load_credentials(app):
    """Return ``(credential, project_id)`` for the Admin SDK.

    Service-account JSON in ``FIREBASE_CREDENTIALS_JSON`` wins, then a
    ``firebase_credentials.json`` beside the package, then application
    default credentials. Returns ``(None, None)`` if none can be loaded.
    """
    raw = os.environ.get("FIREBASE_CREDENTIALS_JSON")
    if raw:
        try:
            info = json.loads(raw)
            return credentials.Certificate(info), info.get("project_id")
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Invalid FIREBASE_CREDENTIALS_JSON: {e}")

    path = os.path.join(os.path.dirname(os.path.dirname(__file__)), CREDENTIALS_FILE)
    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                info = json.load(f)
            return credentials.Certificate(path), info.get("project_id")
        except (json.JSONDecodeError, ValueError) as e:
            app.logger.error(f"Invalid {CREDENTIALS_FILE}: {e}")

    try:
        return credentials.ApplicationDefault(), os.environ.get("FIREBASE_PROJECT_ID")
    except Exception as e:
        app.logger.error(f"No Firebase credentials available: {e}")
    return None, None


def _init_firebase(app):
    """Initialize the default Firebase app once per process."""
    cred, project_id = _load_credentials(app)
    if not cred or firebase_admin._apps:
        return

    bucket = app.config.get("FIREBASE_STORAGE_BUCKET")
    if not bucket and project_id:
        bucket = f"{project_id}.firebasestorage.app"
    options = {"storageBucket": bucket}
    if project_id:
        options["projectId"] = project_id
    try:
        firebase_admin.initialize_app(cred, options)
    except ValueError:
        app.logger.info("Firebase app already initialized.")


def create_app(
    test_config=None, *, db=None, auth_provider=None, media=None, senders=None
):
    """Create and configure an instance of the Flask application.

    The Firestore client, auth provider, media storage and notification
    senders are built here unless passed in, which is how tests swap them.
    """
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        APP_NAME=os.environ.get("APP_NAME") or "Jamaah.net",
        APP_URL=os.environ.get("APP_URL") or "https://jamaah.net",
        API_PREFIX=os.environ.get("API_PREFIX", "/jamaah"),
        KV_COLLECTION=os.environ.get("KV_COLLECTION") or "kv_store",
        LOG_LEVEL=os.environ.get("LOG_LEVEL") or "INFO",
        HTTP_TIMEOUT=float(os.environ.get("HTTP_TIMEOUT") or 10),
        FIREBASE_API_KEY=os.environ.get("FIREBASE_API_KEY"),
        FIREBASE_STORAGE_BUCKET=os.environ.get("FIREBASE_STORAGE_BUCKET"),
        INVITATION_SINGLE_USE=(
            os.environ.get("INVITATION_SINGLE_USE") or "false"
        ).lower()
        in ["true", "1", "t"],
        NOTIFICATION_CHANNELS=os.environ.get("NOTIFICATION_CHANNELS") or "",
        TWILIO_ACCOUNT_SID=os.environ.get("TWILIO_ACCOUNT_SID"),
        TWILIO_AUTH_TOKEN=os.environ.get("TWILIO_AUTH_TOKEN"),
        TWILIO_WHATSAPP_NUMBER=os.environ.get("TWILIO_WHATSAPP_NUMBER"),
        MAIL_SERVER=os.environ.get("MAIL_SERVER") or "smtp.gmail.com",
        MAIL_PORT=int(os.environ.get("MAIL_PORT") or 587),
        MAIL_USE_TLS=(os.environ.get("MAIL_USE_TLS") or "true").lower()
        in ["true", "1", "t"],
        MAIL_USE_SSL=(os.environ.get("MAIL_USE_SSL") or "false").lower()
        in ["true", "1", "t"],
        MAIL_USERNAME=os.environ.get("MAIL_USERNAME"),
        MAIL_PASSWORD=os.environ.get("MAIL_PASSWORD"),
        MAIL_DEFAULT_SENDER=os.environ.get("MAIL_DEFAULT_SENDER")
        or "noreply@jamaah.net",
        MAX_CONTENT_LENGTH=8 * 1024 * 1024,
    )

    if test_config:
        app.config.update(test_config)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    if not app.config.get("TESTING"):
        _init_firebase(app)

    mail.init_app(app)
    backend.init_app(
        app, db=db, auth_provider=auth_provider, media=media, senders=senders
    )

    prefix = app.config["API_PREFIX"].rstrip("/")

    from . import auth as auth_bp
    from . import admin as admin_bp
    from . import notifications as notifications_bp
    from . import timeline as timeline_bp
    from . import events as events_bp
    from . import donations as donations_bp
    from . import marketplace as marketplace_bp
    from . import chat as chat_bp
    from . import content as content_bp
    from . import user as user_bp

    for module in (
        auth_bp,
        admin_bp,
        notifications_bp,
        timeline_bp,
        events_bp,
        donations_bp,
        marketplace_bp,
        chat_bp,
        content_bp,
        user_bp,
    ):
        app.register_blueprint(
            module.bp, url_prefix=f"{prefix}{module.bp.url_prefix or ''}"
        )

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    from .cli import register_commands

    register_commands(app)

    @app.route(f"{prefix}/health")
    def health_check():
        """Perform a simple health check."""
        return jsonify({"status": "ok"})

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
