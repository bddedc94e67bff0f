"""Exceptions raised by template resolution and rendering.

Client errors (validation, not found, forbidden, conflict) describe bad input.
Server errors wrap a failure raised by an expansion engine, language processor
or layout, and always carry the failing key and the original message.
"""

from typing import Any


class TemplateError(Exception):
    """Base class for all template errors."""

    status_code: int = 500
    error_code: str = "TEMPLATE_ERROR"

    def __init__(self, message: str, **details: Any) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for API responses."""
        return {"error": self.error_code, "message": self.message, **self.details}


class TemplateValidationError(TemplateError):
    """Raised when input is malformed or a required field is missing."""

    status_code = 400
    error_code = "TEMPLATE_VALIDATION_ERROR"


class TemplateNotFoundError(TemplateError):
    """Raised when no record, engine or layout exists at the requested key."""

    status_code = 404
    error_code = "TEMPLATE_NOT_FOUND"


class TemplateForbiddenError(TemplateError):
    """Raised when an operation would violate system-record protection."""

    status_code = 403
    error_code = "TEMPLATE_FORBIDDEN"


class TemplateConflictError(TemplateError):
    """Raised when a record already exists at the same unique key."""

    status_code = 409
    error_code = "TEMPLATE_CONFLICT"


class _WrappedProviderError(TemplateError):
    """A server error wrapping an exception raised during rendering."""

    def __init__(self, message: str, original_error: BaseException, **details: Any) -> None:
        self.original_error = original_error
        super().__init__(message, original_error=str(original_error), **details)
        self.__cause__ = original_error


class TemplateEngineError(_WrappedProviderError):
    """Raised when an expansion engine fails to render content."""

    error_code = "TEMPLATE_ENGINE_ERROR"

    def __init__(self, engine: str, original_error: BaseException) -> None:
        self.engine = engine
        super().__init__(
            f"Template engine '{engine}' failed to render content: {original_error}",
            original_error,
            engine=engine,
        )


class TemplateLanguageError(_WrappedProviderError):
    """Raised when a language processor fails to render content."""

    error_code = "TEMPLATE_LANGUAGE_ERROR"

    def __init__(self, language: str, original_error: BaseException) -> None:
        self.language = language
        super().__init__(
            f"Language processor '{language}' failed to render content: {original_error}",
            original_error,
            language=language,
        )


class TemplateLayoutError(_WrappedProviderError):
    """Raised when the layout wrapping a template fails to render."""

    error_code = "TEMPLATE_LAYOUT_ERROR"

    def __init__(self, layout_name: str, original_error: BaseException) -> None:
        self.layout_name = layout_name
        super().__init__(
            f"Template layout '{layout_name}' failed to render: {original_error}",
            original_error,
            layout_name=layout_name,
        )


class TemplateContentError(_WrappedProviderError):
    """Raised when supporting content (e.g. a layout by id) cannot be processed."""

    error_code = "TEMPLATE_CONTENT_ERROR"

    def __init__(self, content_type: str, original_error: BaseException) -> None:
        self.content_type = content_type
        super().__init__(
            f"Failed to process {content_type} content: {original_error}",
            original_error,
            content_type=content_type,
        )


class TemplateRenderError(_WrappedProviderError):
    """Generic wrapper for unrecognized failures during a render call."""

    error_code = "TEMPLATE_RENDER_ERROR"

    def __init__(
        self,
        operation: str,
        original_error: BaseException,
        template_name: str | None = None,
    ) -> None:
        self.operation = operation
        self.template_name = template_name
        if template_name:
            message = (
                f"Failed to render template '{template_name}' during {operation}: "
                f"{original_error}"
            )
        else:
            message = f"Failed to render content during {operation}: {original_error}"
        super().__init__(
            message,
            original_error,
            operation=operation,
            template_name=template_name,
        )


def is_known_template_error(exc: BaseException) -> bool:
    """Return True if the exception is already part of the template taxonomy.

    Known errors propagate unchanged; anything else is wrapped exactly once
    at the render entry point.
    """
    return isinstance(exc, TemplateError)
