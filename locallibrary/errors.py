"""Error pages for not-found records, HTTP errors and persistence failures."""
from flask import current_app, render_template, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .models import RecordValidationError, db

PERSISTENCE_ERROR_MESSAGE = "The catalog could not complete this request."


def render_error(message, status, error=None):
    detail = None
    if error is not None and current_app.config.get('SHOW_ERROR_DETAIL'):
        detail = f"{type(error).__name__}: {error}"
    return render_template('error.html', title="Error", message=message,
                           status=status, detail=detail), status


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code == 404:
            app.logger.info("Not found: %s (%s)", request.path, e.description)
        body, status = render_error(e.description or e.name, e.code, e)
        # keep headers such as Allow on 405
        headers = [(name, value) for name, value in e.get_response().headers
                   if name.lower() not in ("content-type", "content-length")]
        return body, status, headers

    @app.errorhandler(SQLAlchemyError)
    def persistence_error(e):
        db.session.rollback()
        app.logger.exception("Database error on %s %s", request.method, request.path)
        return render_error(PERSISTENCE_ERROR_MESSAGE, 500, e)

    @app.errorhandler(RecordValidationError)
    def rejected_write(e):
        db.session.rollback()
        app.logger.error("Rejected write on %s %s: %s", request.method, request.path, e)
        return render_error(PERSISTENCE_ERROR_MESSAGE, 500, e)
