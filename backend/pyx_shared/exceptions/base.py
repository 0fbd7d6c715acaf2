"""
Base importer exceptions
"""


class ImporterException(Exception):
    """Base importer exception"""

    def __init__(self, message: str, code: str = "IMPORTER_ERROR",
                 details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(ImporterException):
    """Invalid import configuration (caught before any parsing starts)"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details or {}
        )


class SourceReadError(ImporterException):
    """A previously validated source could not be read"""

    def __init__(self, message: str, source: str = None):
        super().__init__(
            message=f"Source read error: {message}",
            code="SOURCE_READ_ERROR",
            details={"source": source} if source else {}
        )
