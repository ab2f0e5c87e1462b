"""Render compile errors as inert CSS.

The payload is a comment plus a ``body:before`` rule, so a browser shows the
error on the page instead of failing to load the stylesheet.
"""

from ..errors import CompileError


def format_location(error: CompileError, source: str) -> str:
    """Return ``file:line:column``, omitting parts the compiler did not report."""
    location = error.file or source
    if error.line is not None:
        location += f":{error.line}"
        if error.column is not None:
            location += f":{error.column}"
    return location


def _css_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "").replace("\n", "\\A ")


def render_error_css(error: CompileError, source: str) -> str:
    """Build the diagnostic stylesheet for a failed compile.

    Args:
        error: The compiler's error
        source: Path of the source that was being compiled

    Returns:
        CSS text embedding the message and its location
    """
    message = f"{error.message} in {format_location(error, source)}"
    comment = message.replace("*/", "* /")
    return (
        f"/*\n{comment}\n*/\n"
        f'body:before {{ white-space: pre; font-family: monospace; content: "{_css_string(message)}"; }}\n'
    )
