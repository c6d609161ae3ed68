from flask import current_app


def services():
    """Service bundle built by the application factory."""
    return current_app.extensions['duoquiz']
