from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
from sqlalchemy.exc import SQLAlchemyError
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Import and register blueprints here
    from wagerbucks.main import main
    flask_app.register_blueprint(main)

    from wagerbucks.api.users import users
    from wagerbucks.api.wagers import wagers
    # Routes are mounted at the root to match the bot client paths
    flask_app.register_blueprint(users)
    flask_app.register_blueprint(wagers)

    from wagerbucks.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from wagerbucks.errors import LedgerError, PersistenceFailure

    @flask_app.errorhandler(LedgerError)
    def handle_ledger_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_persistence_error(exc):
        db.session.rollback()
        flask_app.logger.error(f"[persistence] {exc.__class__.__name__}: {exc}")
        failure = PersistenceFailure(f"persistence failure: {exc.__class__.__name__}")
        return jsonify(failure.to_dict()), failure.status_code

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        from wagerbucks.models import User, STARTING_BALANCE
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed users
            seed = [('1001', 'testuser1'), ('1002', 'testuser2'), ('1003', 'testuser3')]
            for external_id, name in seed:
                db.session.add(User(external_id=external_id, display_name=name, balance=STARTING_BALANCE))

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
