from flask import Blueprint, current_app, jsonify, request

from duoquiz.api import services
from duoquiz.errors import ValidationError

questions = Blueprint('questions', __name__)


@questions.route('', methods=['GET'])
def random_questions():
    language = request.args.get('language')
    count = request.args.get('count', type=int)
    if not language or not count:
        raise ValidationError('language and count required')
    allowed = current_app.config.get('ALLOWED_QUESTION_COUNTS') or ()
    if allowed and count not in allowed:
        raise ValidationError(f'count must be one of {", ".join(str(c) for c in allowed)}')
    picked = services().questions.random_questions(language, count)
    return jsonify([q.to_dict() for q in picked])
