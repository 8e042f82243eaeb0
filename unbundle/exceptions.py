"""Custom exceptions for unbundle.

This module defines the hierarchy of exceptions raised while splitting a Go
compilation unit, so that callers can tell load failures, malformed input,
formatter rejections and filesystem failures apart.
"""


class UnbundleError(Exception):
    """Base exception for all unbundle errors.

    Every fatal condition raised by unbundle inherits from this class, making it
    easy to catch them all with a single except clause.

    Example:
        try:
            Unbundler(config).run()
        except UnbundleError as e:
            print(f"unbundle error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class LoadError(UnbundleError):
    """The compilation unit could not be read or parsed.

    Raised for missing files, unresolved packages and Go syntax errors.

    Attributes:
        source: The file path or package identifier that failed to load.
        reason: Explanation of why loading failed.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        source: str,
        reason: str | None = None,
        cause: Exception | None = None,
    ):
        self.source = source
        self.reason = reason
        self.cause = cause
        message = f"Failed to load '{source}'"
        if reason:
            message += f': {reason}'
        if cause:
            message += f' ({cause})'
        super().__init__(message)


class StructuralInvariantError(UnbundleError):
    """A declaration does not have the shape the classifier relies on.

    Attributes:
        declaration: Name of the offending declaration.
        reason: What is wrong with it.
    """

    def __init__(self, declaration: str, reason: str):
        self.declaration = declaration
        self.reason = reason
        super().__init__(f"Malformed declaration '{declaration}': {reason}")


class FormattingError(UnbundleError):
    """The source formatter rejected a synthesized file.

    Attributes:
        filename: The proposed file name handed to the formatter.
        reason: Diagnostic output of the formatter.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        filename: str,
        reason: str | None = None,
        cause: Exception | None = None,
    ):
        self.filename = filename
        self.reason = reason
        self.cause = cause
        message = f"Failed to format '{filename}'"
        if reason:
            message += f': {reason}'
        if cause:
            message += f' ({cause})'
        super().__init__(message)


class OutputError(UnbundleError):
    """Error preparing or writing the destination directory.

    Attributes:
        output_path: The path that was being removed, created or written.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, output_path: str, cause: Exception | str | None = None):
        self.output_path = output_path
        self.cause = cause
        message = f"Failed to write output to '{output_path}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class ConfigurationError(UnbundleError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)


class CollisionWarning(UserWarning):
    """Two bucket keys differ only by letter case; one of them was renamed."""
