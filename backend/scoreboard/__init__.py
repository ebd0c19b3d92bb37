from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from scoreboard.main import main
    flask_app.register_blueprint(main)

    from scoreboard.api.matches import matches
    flask_app.register_blueprint(matches, url_prefix='/api/matches')

    _register_error_handlers(flask_app)

    from scoreboard.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from scoreboard.services.match import create_match
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            db.session.add(create_match('Home', 'Away'))
            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app


def _register_error_handlers(flask_app):
    from scoreboard.exceptions import ScoreboardError

    @flask_app.errorhandler(ScoreboardError)
    def handle_scoreboard_error(exc):
        db.session.rollback()
        flask_app.logger.info(f"[rejected] code={exc.code} message={exc.message}")
        return jsonify(exc.to_dict()), exc.status_code
