import logging

from flask import Flask, jsonify

from library_backend.config import Config
from library_backend.errors import register_error_handlers
from library_backend.extensions import db, migrate, jwt, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # models must be imported before migrate/create_all see the metadata
    from library_backend.models import book, loan, member, user  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    register_error_handlers(app)

    from library_backend.controllers.auth_controller import auth_bp
    from library_backend.controllers.book_controller import book_bp
    from library_backend.controllers.loan_controller import loan_bp
    from library_backend.controllers.member_controller import member_bp
    from library_backend.controllers.stats_controller import stats_bp
    app.register_blueprint(auth_bp)
    app.register_blueprint(book_bp)
    app.register_blueprint(member_bp)
    app.register_blueprint(loan_bp)
    app.register_blueprint(stats_bp)

    from library_backend.cli import register_cli
    register_cli(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # Scheduler (overdue reminders, off unless configured)
    from library_backend.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
