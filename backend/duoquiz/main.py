from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from duoquiz import db

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the duoquiz API!'})


@main.route('/health')
def health():
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.warning(f"[health] database unreachable: {exc}")
        return jsonify({'status': 'degraded', 'database': 'disconnected', 'timestamp': timestamp}), 503
    return jsonify({'status': 'healthy', 'database': 'connected', 'timestamp': timestamp})
