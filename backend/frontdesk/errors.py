"""
Error taxonomy

Services raise these; the HTTP layer maps them to status codes
(see frontdesk.exception_handler). All derive from ValueError so callers
that only care about "the operation was refused" can catch that.
"""


class FrontDeskError(ValueError):
    """Base class for every refused operation"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FrontDeskError):
    """Missing or invalid input"""
    status_code = 400


class NotFoundError(FrontDeskError):
    status_code = 404


class BusinessRuleError(FrontDeskError):
    """A business rule refused the operation (duplicate email, room taken...)"""
    status_code = 409


class IllegalTransitionError(BusinessRuleError):
    """Status change not allowed from the current state"""

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"{entity} cannot move from '{current}' to '{target}'")
        self.entity = entity
        self.current = current
        self.target = target


class AuthorizationError(FrontDeskError):
    """Missing session, missing staff record or bad credentials"""
    status_code = 401


class PermissionDeniedError(AuthorizationError):
    status_code = 403


class StoreError(FrontDeskError):
    """The database refused or failed the query"""
    status_code = 503
