"""Quiz domain services: creation, submission, scoring, sharing, results.

This package holds the quiz lifecycle logic used by the HTTP blueprints and
CLI commands, keeping transport concerns separated from the rules of the
game. Every service receives the repository it works against.
"""

from .quizzes import QuizService
from .answers import AnswerSubmissionService
from .sharing import ShareTokenIssuer
from .results import ResultsAggregator
from .questions import QuestionBankSupplier


class Services:
    def __init__(self, repository, quizzes, answers, sharing, results, questions):
        self.repository = repository
        self.quizzes = quizzes
        self.answers = answers
        self.sharing = sharing
        self.results = results
        self.questions = questions


def build_services(repository, config) -> Services:
    sharing = ShareTokenIssuer(
        repository,
        token_bytes=int(config.get('SHARE_TOKEN_BYTES', 24)),
        frontend_domain=config.get('FRONTEND_DOMAIN', ''),
    )
    return Services(
        repository=repository,
        quizzes=QuizService(repository, sharing, ttl_days=int(config.get('QUIZ_TTL_DAYS', 30))),
        answers=AnswerSubmissionService(repository),
        sharing=sharing,
        results=ResultsAggregator(repository),
        questions=QuestionBankSupplier(repository.db),
    )
