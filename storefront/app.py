# storefront/app.py
import logging

from flask import Flask

from storefront.config import Config

# Extensions
from storefront.extensions import db, login_manager, bcrypt, migrate, cors
from storefront.errors import register_error_handlers
from storefront.commands import register_commands

# Blueprints
from storefront.auth.routes import auth_bp
from storefront.api.routes.product_routes import api_products
from storefront.api.routes.order_routes import order_bp
from storefront import models as _models  # noqa: F401
from storefront.auth import loaders as _loaders  # noqa: F401


def create_app(config_object=Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(level=getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))
    logging.getLogger("storefront").setLevel(app.config["LOG_LEVEL"].upper())

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": app.config["CORS_ORIGINS"],
                "supports_credentials": True,
            }
        },
    )

    register_error_handlers(app)
    register_commands(app)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_products)
    app.register_blueprint(order_bp)

    @app.get("/healthz")
    def healthz():
        db.session.execute(db.text("SELECT 1"))
        return {"ok": True}, 200

    return app
