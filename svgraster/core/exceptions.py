from typing import Any, Dict, List, Optional, TypedDict, Union


class ContentDetails(TypedDict, total=False):
    """Type-safe details for source read errors."""

    source_path: str
    errno: int
    strerror: str


class LoadDetails(TypedDict, total=False):
    """Type-safe details for page load errors."""

    source_path: str
    status: str


class EngineDetails(TypedDict, total=False):
    """Type-safe details for renderer engine errors."""

    browser_type: str
    operation: str
    reason: str


class ConfigDetails(TypedDict, total=False):
    """Type-safe details for configuration errors."""

    config_key: str
    config_value: Union[str, int, float, bool]
    validation_rule: str


ErrorDetails = Union[
    ContentDetails,
    LoadDetails,
    EngineDetails,
    ConfigDetails,
    Dict[str, Union[str, int, float, bool, List[str]]],
]


class SvgRasterError(Exception):
    """Base exception for all svgraster errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[ErrorDetails] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ContentReadError(SvgRasterError):
    """Raised when a source file cannot be read."""

    def __init__(self, message: str, details: Optional[ContentDetails] = None):
        super().__init__(message=message, error_code="SVG001", details=details)


class PageLoadError(SvgRasterError):
    """Raised when the renderer reports a non-success load status."""

    def __init__(self, source_path: str, status: str):
        super().__init__(
            message=f"File {source_path} has been opened with status {status}",
            error_code="SVG002",
            details={"source_path": source_path, "status": status},
        )
        self.source_path = source_path
        self.status = status


class EngineError(SvgRasterError):
    """Raised when the renderer engine cannot be started or create a page."""

    def __init__(self, message: str, details: Optional[EngineDetails] = None):
        super().__init__(message=message, error_code="SVG003", details=details)


class ConfigurationError(SvgRasterError):
    """Raised when scheduler or coordinator parameters are invalid."""

    def __init__(self, message: str, details: Optional[ConfigDetails] = None):
        super().__init__(message=message, error_code="SVG004", details=details)


class BatchConversionError(SvgRasterError):
    """Raised by the batch entry points when one or more files failed.

    ``failures`` holds one ``TaskFailure`` per failed file, in completion order.
    """

    def __init__(self, failures: List[Any]):
        super().__init__(
            message=f"{len(failures)} file(s) failed to convert",
            error_code="SVG100",
            details={"failed_count": len(failures)},
        )
        self.failures = list(failures)

    @property
    def errors(self) -> List[BaseException]:
        return [failure.error for failure in self.failures]
