"""
Error taxonomy for the assignment engine.
Each error carries an API error code and the HTTP status it maps to.
"""


class AssignmentError(Exception):
    """Base class for business errors raised by the engine."""

    code = 'assignment_error'
    status = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFound(AssignmentError):
    """Referenced event, resource or assignment does not exist (or is inactive)."""

    code = 'not_found'
    status = 404


class Conflict(AssignmentError):
    """The (event, resource) pair already has an assignment."""

    code = 'conflict'
    status = 409


class BadRequest(AssignmentError):
    """The request carries nothing to act on (e.g. an empty update)."""

    code = 'bad_request'
    status = 400


class ValidationFailure(AssignmentError):
    """A business-level value rule was violated (e.g. quantity < 1)."""

    code = 'validation_error'
    status = 422
