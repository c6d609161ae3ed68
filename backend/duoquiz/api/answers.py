from flask import Blueprint, jsonify, request

from duoquiz.api import services
from duoquiz.errors import ValidationError

answers = Blueprint('answers', __name__)


@answers.route('', methods=['POST'])
def submit_answers():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValidationError()
    outcome = services().answers.submit(data.get('quizId'), data.get('playerType'), data.get('batch'))
    if outcome['completed']:
        return jsonify({'message': 'Quiz completed', 'score': outcome['score']}), 201
    return jsonify({
        'message': 'Answers saved',
        'score': None,
        'answered': outcome['answered'],
        'remaining': outcome['remaining'],
    }), 201
