from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import json
import os
import click
from duoquiz.config import Config

db = SQLAlchemy()
migrate = Migrate()
MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")
dev_origins = [
    "http://localhost:3000",
    "http://localhost:3001",
]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db, directory=MIGRATIONS_DIR)

    allowed_origins = [flask_app.config.get('FRONTEND_DOMAIN', 'http://localhost:3000')]
    if flask_app.config.get('APP_ENV') != 'production':
        allowed_origins += [o for o in dev_origins if o not in allowed_origins]
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # One repository per process, shared by every service
    from duoquiz.repository import SqlQuizRepository
    from duoquiz.services import build_services
    repository = SqlQuizRepository(db)
    flask_app.extensions['duoquiz'] = build_services(repository, flask_app.config)

    from duoquiz.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Import and register blueprints here
    from duoquiz.main import main
    flask_app.register_blueprint(main, url_prefix='/api')

    from duoquiz.api.quizzes import quizzes
    from duoquiz.api.answers import answers
    from duoquiz.api.results import results
    from duoquiz.api.questions import questions
    flask_app.register_blueprint(quizzes, url_prefix='/api/quizzes')
    flask_app.register_blueprint(answers, url_prefix='/api/answers')
    flask_app.register_blueprint(results, url_prefix='/api/results')
    flask_app.register_blueprint(questions, url_prefix='/api/questions')

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database."""
        import duoquiz.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('seed-questions')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def seed_questions_command(path):
        """Loads predefined questions from a JSON file into the question bank."""
        with open(path, encoding='utf-8') as fh:
            entries = json.load(fh)
        with flask_app.app_context():
            supplier = flask_app.extensions['duoquiz'].questions
            inserted = supplier.add_bank_questions(entries)
            print(f'Inserted {inserted} questions into the bank')

    @click.command('quiz-stats')
    def quiz_stats_command():
        """Prints global quiz statistics."""
        with flask_app.app_context():
            stats = repository.completion_stats()
            for key, value in stats.items():
                print(f'{key}: {value}')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(seed_questions_command)
    flask_app.cli.add_command(quiz_stats_command)

    return flask_app
