"""
Errors raised by handlers and the router, each mapped to a wire code.
"""

from pydantic import ValidationError


class StorefrontError(Exception):
    code = "INTERNAL_SERVER_ERROR"
    status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class NotFoundError(StorefrontError):
    """The row an update targets does not exist."""
    code = "NOT_FOUND"
    status = 404


class ReferenceNotFoundError(StorefrontError):
    """A foreign key points at a row that does not exist."""
    code = "PRECONDITION_FAILED"
    status = 412

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InputValidationError(StorefrontError):
    code = "BAD_REQUEST"
    status = 400

    def __init__(self, error: ValidationError):
        self.issues = [
            {
                "loc": list(e["loc"]),
                "msg": e["msg"],
                "type": e["type"],
            }
            for e in error.errors()
        ]
        first = self.issues[0] if self.issues else None
        if first:
            where = ".".join(str(p) for p in first["loc"]) or "input"
            message = f"Invalid input: {where}: {first['msg']}"
        else:
            message = "Invalid input"
        super().__init__(message)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["issues"] = self.issues
        return data


class UnknownProcedureError(StorefrontError):
    code = "NOT_FOUND"
    status = 404

    def __init__(self, name: str):
        super().__init__(f'No procedure found on path "{name}"')
        self.name = name


class MethodNotAllowedError(StorefrontError):
    code = "METHOD_NOT_SUPPORTED"
    status = 405

    def __init__(self, name: str, method: str):
        super().__init__(f'Unsupported {method} request to mutation "{name}"')
