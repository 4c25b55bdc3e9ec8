from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from folio.extensions import db, jwt
from folio.domain.invariants.exceptions import (
    ContentValidationError,
    InvariantViolation,
    SectionNotFound,
)

def _error(kind, message, status, **extra):
    response = jsonify({"error": kind, "message": message, **extra})
    response.status_code = status
    return response

def register_error_handlers(app):
    @app.errorhandler(ContentValidationError)
    def handle_validation_error(error):
        return _error("ValidationError", error.message, 400, details=error.details)

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        return _error("InvariantViolation", str(error), 400)

    @app.errorhandler(SectionNotFound)
    def handle_section_not_found(error):
        return _error("SectionNotFound", str(error), 404)

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(error):
        db.session.rollback()
        current_app.logger.exception("Storage failure: %s", error)
        return _error("StorageError", "The change could not be stored; nothing was applied.", 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _error(error.name, error.description, error.code)

def register_jwt_handlers():
    @jwt.unauthorized_loader
    def missing_token(reason):
        return _error("AuthenticationRequired", reason, 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _error("SessionExpired", "The admin session has expired. Please log in again.", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _error("AuthenticationRequired", reason, 401)
