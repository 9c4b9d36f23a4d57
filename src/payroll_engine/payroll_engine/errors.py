from __future__ import annotations

import logging

from flask import Flask, jsonify

from .core.exceptions import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    SeparationOfDutiesViolation,
    StateTransitionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First match wins; EmployeeNotFound is both a ValidationError and a NotFoundError.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (SeparationOfDutiesViolation, 403),
    (NotFoundError, 404),
    (StateTransitionError, 409),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = status_for(exc)
        logger.warning("%s (%s): %s", type(exc).__name__, status, exc)
        return jsonify({"error": str(exc), "type": type(exc).__name__}), status
