from flask import Blueprint, jsonify, request

from duoquiz.api import services
from duoquiz.errors import ValidationError

quizzes = Blueprint('quizzes', __name__)


@quizzes.route('', methods=['POST'])
def create_quiz():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValidationError()
    language = data.get('language')
    creator_name = data.get('creatorName')
    partner_name = data.get('partnerName')
    question_count = data.get('questionCount')
    question_list = data.get('questions')
    if not all([language, creator_name, partner_name, question_count, question_list]):
        raise ValidationError('Missing fields')

    quiz = services().quizzes.create(language, creator_name, partner_name, question_count, question_list)
    return jsonify({'quizId': quiz.id, 'shareToken': quiz.share_token}), 201


@quizzes.route('/share/<string:token>', methods=['GET'])
def get_quiz_by_share_token(token):
    quiz = services().sharing.resolve(token)
    return jsonify(quiz.to_dict(include_questions=True))


@quizzes.route('/<string:quiz_id>', methods=['GET'])
def get_quiz(quiz_id):
    quiz = services().quizzes.get(quiz_id)
    return jsonify(quiz.to_dict(include_questions=True))


@quizzes.route('/<string:quiz_id>/duplicate', methods=['GET'])
def duplicate_quiz(quiz_id):
    new_quiz = services().quizzes.duplicate(
        quiz_id,
        request.args.get('newCreatorName'),
        request.args.get('newPartnerName'),
    )
    return jsonify({'newQuizId': new_quiz.id})


@quizzes.route('/<string:quiz_id>/share', methods=['POST'])
def share_quiz(quiz_id):
    if not quiz_id.strip():
        raise ValidationError('Quiz ID required')
    sharing = services().sharing
    token = sharing.issue(quiz_id)
    return jsonify({'shareLink': sharing.share_link(token), 'shareToken': token})
