from fastapi import status

class BaseAppException(Exception):
    def __init__(self, code: str, message: str, http_status: int):
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)

class NotFoundError(BaseAppException):
    def __init__(self, code: str = "EVENT_NOT_FOUND", message: str = "Event not found"):
        super().__init__(code, message, status.HTTP_404_NOT_FOUND)

class ValidationAppError(BaseAppException):
    def __init__(self, code: str, message: str):
        super().__init__(code, message, status.HTTP_400_BAD_REQUEST)

class PersistenceError(BaseAppException):
    """Raised by an event store when a mutation is rejected; message is shown to the user as-is."""
    def __init__(self, message: str, code: str = "PERSISTENCE_ERROR"):
        super().__init__(code, message, status.HTTP_409_CONFLICT)
