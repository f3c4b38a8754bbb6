"""
Store Errors - Failures raised by the persistence layer

Every error carries the HTTP status the API layer maps it to, so routes can
let them propagate and main.py turns them into JSON responses.
"""


class StoreError(Exception):
    """Base class for store failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StoreError):
    """A resume, library entity, table or record id does not exist."""

    status_code = 404


class UnknownReference(NotFound):
    """A payload points at a library id that does not exist."""

    status_code = 422


class ConstraintViolation(StoreError):
    """A write would break a unique or foreign key constraint."""

    status_code = 409


class InvalidPayload(StoreError):
    """A payload failed validation."""

    status_code = 422


class MalformedInlineEntity(InvalidPayload):
    """
    An inline object inside a resume partition is missing required fields.

    The whole resume write is rolled back when this is raised.

    Attributes:
        partition: Partition name ("experiences", "projects", ...)
        position: Index of the offending entry in the submitted list
    """

    def __init__(self, partition: str, position: int, detail: str):
        super().__init__(f"{partition}[{position}]: {detail}")
        self.partition = partition
        self.position = position
