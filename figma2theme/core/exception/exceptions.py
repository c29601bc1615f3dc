from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from figma2theme.core.exception.error_codes import ErrorCode


class ServiceException(Exception):
    def __init__(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        suggestions: Iterable[str] = (),
    ):
        super().__init__(message or error_code.value)
        self.error_code = error_code
        self.message = message or error_code.value
        self.suggestions: List[str] = list(suggestions)


class ConfigurationError(ServiceException):
    """Missing or malformed credentials / file reference"""


class FigmaApiError(ServiceException):
    """Network failure, auth rejection or invalid file key"""

    def __init__(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        suggestions: Iterable[str] = (),
        status_code: Optional[int] = None,
    ):
        super().__init__(error_code, message, suggestions)
        self.status_code = status_code


@dataclass(frozen=True)
class Problem:
    message: str
    suggestion: str = ""


class StructuralError(ServiceException):
    """One or more structural problems in the Figma document, reported together"""

    def __init__(self, error_code: ErrorCode, problems: Sequence[Problem]):
        self.problems = list(problems)
        message = "\n".join(p.message for p in self.problems)
        suggestions = [p.suggestion for p in self.problems if p.suggestion]
        super().__init__(error_code, message, suggestions)


class TokenConversionError(ServiceException, ValueError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.UNSUPPORTED_VALUE, message)


class InvalidTokenPathError(ServiceException, ValueError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_TOKEN_PATH, message)


class InvalidTokenValueError(ServiceException, TypeError):
    def __init__(self, message: str):
        super().__init__(ErrorCode.INVALID_TOKEN_VALUE, message)


class SvgOptimizationError(ServiceException):
    def __init__(self, message: str):
        super().__init__(ErrorCode.SVG_OPTIMIZATION_FAILED, message)


class ExportError(ServiceException):
    def __init__(self, message: str, suggestions: Iterable[str] = ()):
        super().__init__(ErrorCode.EXPORT_FAILED, message, suggestions)
