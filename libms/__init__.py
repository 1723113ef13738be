from flask import Flask, jsonify

from libms.config import Config
from libms.extensions import db, migrate, jwt
from libms.db_objects import ensure_db_objects


def create_app(config_object=Config, overrides=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # db first: ensure_db_objects needs db.engine
    db.init_app(app)
    ensure_db_objects(app)

    migrate.init_app(app, db)
    jwt.init_app(app)

    from libms.utils.jwt_callbacks import register_jwt_callbacks
    register_jwt_callbacks(jwt)

    from libms.utils.errors import register_error_handlers
    register_error_handlers(app)

    from libms.controllers.auth_controller import auth_bp
    from libms.controllers.book_controller import book_bp
    from libms.controllers.category_controller import category_bp
    from libms.controllers.borrowing_controller import borrowing_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(category_bp, url_prefix="/categories")
    app.register_blueprint(borrowing_bp, url_prefix="/borrowing-requests")

    from libms.seed import seed_command
    app.cli.add_command(seed_command)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    return app
