"""Application exception classes and handlers."""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, code: str, status_code: int = 400) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)


# --- Not Found (404) ---


class FormNotFoundError(AppException):
    """Form not found."""

    def __init__(self) -> None:
        super().__init__(
            message="Form not found",
            code="FORM_NOT_FOUND",
            status_code=404,
        )


class ConversationNotFoundError(AppException):
    """Conversation not found."""

    def __init__(self) -> None:
        super().__init__(
            message="Conversation not found",
            code="CONVERSATION_NOT_FOUND",
            status_code=404,
        )


# --- Model failures (502) ---


class FormDataExtractionError(AppException):
    """Structured field data could not be obtained from the model."""

    def __init__(self, code: str = "FORM_DATA_EXTRACTION_FAILED") -> None:
        super().__init__(
            message="Unable to get form data from conversation",
            code=code,
            status_code=502,
        )


class FormDataParseError(FormDataExtractionError):
    """The model replied, but not with a JSON object."""

    def __init__(self) -> None:
        super().__init__(code="FORM_DATA_PARSE_FAILED")


class ConversationNamingError(AppException):
    """The model could not name the conversation."""

    def __init__(self) -> None:
        super().__init__(
            message="Unable to generate conversation name",
            code="CONVERSATION_NAMING_FAILED",
            status_code=502,
        )


# --- Save failures (500) ---


class ConversationSaveError(AppException):
    """Saving a finished conversation failed."""

    def __init__(self, code: str = "CONVERSATION_SAVE_FAILED") -> None:
        super().__init__(
            message="Unable to save conversation",
            code=code,
            status_code=500,
        )


class ConversationPersistenceError(ConversationSaveError):
    """The database rejected the conversation record."""

    def __init__(self) -> None:
        super().__init__(code="CONVERSATION_PERSISTENCE_FAILED")


# --- Exception Handlers ---


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Central exception handler for AppException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {
                "code": exc.code,
                "message": exc.message,
            },
        },
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors in the application error envelope."""
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        },
    )
