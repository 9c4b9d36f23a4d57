class DomainError(Exception):
    """Base exception for business rule violations."""


class ConfigurationError(DomainError):
    """Raised at startup when engine settings are missing or inconsistent."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when the acting user may not touch a record."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class EmployeeNotFound(ValidationError, NotFoundError):
    def __init__(self, employee_id):
        super().__init__(f"Employee not found with ID: {employee_id}")
        self.employee_id = employee_id


class RunNotFound(NotFoundError):
    def __init__(self, run_id):
        super().__init__(f"Payroll run not found with ID: {run_id}")
        self.run_id = run_id


class AttendanceNotFound(NotFoundError):
    pass


class LeaveRequestNotFound(NotFoundError):
    pass


class StateTransitionError(DomainError):
    """Raised when an entity is not in a state that allows the requested change."""


class InvalidStateTransition(StateTransitionError):
    pass


class SeparationOfDutiesViolation(StateTransitionError):
    """Maker-checker: the creator of a record cannot approve it."""
