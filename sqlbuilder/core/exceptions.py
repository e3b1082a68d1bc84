"""
Исключения приложения.
Ошибки БД сюда не входят: QueryService возвращает их как {"ok": False, "error": ...}.
"""
from typing import Any, Dict, Optional


class SQLBuilderError(Exception):
    """Базовое исключение приложения."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(SQLBuilderError):
    """Bad value in .env / environment."""


class ValidationError(SQLBuilderError):
    """Local precondition failed (empty name, empty query text, ...)."""


# ---------- AI draft ----------

class DraftError(SQLBuilderError):
    """Base for all AI draft faults."""


class MissingCredentialError(DraftError):
    def __init__(self, message: str = "Please enter your Claude API key first"):
        super().__init__(message)


class MissingPromptError(DraftError):
    def __init__(self, message: str = "Please describe what query you want to generate"):
        super().__init__(message)


class DraftInFlightError(DraftError):
    def __init__(self, message: str = "A query is already being generated"):
        super().__init__(message)


class DraftRequestError(DraftError):
    """Transport failure or non-2xx response from the completion API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        details = {"status_code": status_code} if status_code is not None else None
        super().__init__(message, details)
        self.status_code = status_code

    def __str__(self) -> str:
        # в UI показываем только текст, без details
        return self.message
