from flask import Blueprint, jsonify

from duoquiz.api import services

results = Blueprint('results', __name__)


@results.route('/<string:quiz_id>', methods=['GET'])
def get_results(quiz_id):
    return jsonify(services().results.get_results(quiz_id))
