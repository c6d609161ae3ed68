"""Share tokens: opaque, high-entropy links to a single quiz."""

import secrets

from flask import current_app

from duoquiz.errors import ExpiredError, NotFoundError
from duoquiz.models import Quiz


class ShareTokenIssuer:
    def __init__(self, repository, token_bytes=24, frontend_domain=''):
        self.repository = repository
        self.token_bytes = token_bytes
        self.frontend_domain = (frontend_domain or '').rstrip('/')

    def mint(self) -> str:
        """Generate a token not yet stored on any quiz."""
        while True:
            token = secrets.token_urlsafe(self.token_bytes)
            if not self.repository.token_exists(token):
                return token

    def issue(self, quiz_id) -> str:
        """Replace the quiz's share token with a fresh one and return it."""
        with self.repository.unit_of_work() as repo:
            quiz = repo.get_quiz(quiz_id)
            if not quiz:
                raise NotFoundError()
            if quiz.is_expired():
                raise ExpiredError()
            token = self.mint()
            repo.set_share_token(quiz.id, token)
        current_app.logger.info(f"[share-issue] quiz={quiz_id}")
        return token

    def share_link(self, token) -> str:
        return f"{self.frontend_domain}/play/{token}"

    def resolve(self, token) -> Quiz:
        quiz = self.repository.get_quiz_by_token(token)
        if not quiz:
            raise NotFoundError()
        # Expiry belongs to the quiz, the token itself never lapses
        if quiz.is_expired():
            raise ExpiredError()
        return quiz
