# backend/blueprint/errors.py


class BlueprintError(Exception):
    """Base class for errors raised by the service layer"""


class ValidationError(BlueprintError, ValueError):
    """Bad enum value, blank required field or duplicate unique value"""


class ConstraintViolation(ValidationError):
    """The database rejected a write (unique or foreign key constraint)"""


class NotFoundError(BlueprintError, LookupError):
    """Referenced project, document or version does not exist"""

    def __init__(self, resource: str, resource_id: int):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")
