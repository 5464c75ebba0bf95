from flask import jsonify, redirect, current_app
from werkzeug.exceptions import HTTPException
from docfolio.domain.invariants.exceptions import InvariantViolation
from docfolio.content_store.errors import ContentStoreError, ConstraintViolation, StorageError
from docfolio.application.views import RedirectTo

GENERIC_FAILURE = "Something went wrong, please try again"

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(ConstraintViolation)
    def handle_constraint_violation(error):
        response = jsonify({
            "error": "Conflict",
            "message": str(error)
        })
        response.status_code = 409
        return response

    @app.errorhandler(ContentStoreError)
    def handle_content_store_error(error):
        current_app.logger.error(f"Content store failure: {error!r} (cause: {error.__cause__!r})")
        response = jsonify({
            "error": "ContentStoreError",
            "message": GENERIC_FAILURE
        })
        response.status_code = 500
        return response

    @app.errorhandler(StorageError)
    def handle_storage_error(error):
        response = jsonify({
            "error": "StorageError",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(RedirectTo)
    def handle_redirect(error):
        return redirect(error.location, code=302)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
