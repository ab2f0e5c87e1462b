"""Exceptions raised by sass_library."""


class SassLibraryError(Exception):
    """Base class for sass_library errors."""


class FilesystemError(SassLibraryError):
    """Raised when a stat/read fails for a reason other than the file being missing.

    Fatal for the current request; never retried.
    """

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Filesystem error on {path}: {cause}")
        self.path = path
        self.cause = cause


class SourceNotFoundError(SassLibraryError):
    """Raised when the requested source file does not exist.

    Not an error for the caller: the request passes through to the next handler.
    """

    def __init__(self, path: str):
        super().__init__(f"Source not found: {path}")
        self.path = path


class CompileError(SassLibraryError):
    """Raised by a compiler when it rejects its input.

    Attributes:
        message: Compiler error message
        line: 1-based line of the error, when known
        column: 1-based column of the error, when known
        file: File the error occurred in, when it is not the compiled source
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        file: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.file = file
