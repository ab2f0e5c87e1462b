"""
Unit tests for compile error rendering.
"""

import pytest

from sass_library.compiler import format_location
from sass_library.compiler import render_error_css
from sass_library.errors import CompileError


@pytest.mark.unit
class TestFormatLocation:
    def test_full_location(self) -> None:
        error = CompileError("boom", line=4, column=2)

        assert format_location(error, "/site/a.scss") == "/site/a.scss:4:2"

    def test_prefers_error_file(self) -> None:
        error = CompileError("boom", line=1, column=9, file="/site/_p.scss")

        assert format_location(error, "/site/a.scss") == "/site/_p.scss:1:9"

    def test_line_without_column(self) -> None:
        assert format_location(CompileError("boom", line=4), "/a.scss") == "/a.scss:4"

    def test_no_position(self) -> None:
        assert format_location(CompileError("boom"), "/a.scss") == "/a.scss"


@pytest.mark.unit
class TestRenderErrorCss:
    def test_layout(self) -> None:
        css = render_error_css(CompileError("Undefined variable", line=2, column=5), "/site/a.scss")

        assert css == (
            "/*\nUndefined variable in /site/a.scss:2:5\n*/\n"
            'body:before { white-space: pre; font-family: monospace; '
            'content: "Undefined variable in /site/a.scss:2:5"; }\n'
        )

    def test_escapes_quotes_and_newlines(self) -> None:
        css = render_error_css(CompileError('bad "thing"\nsecond line'), "/a.scss")

        assert 'content: "bad \\"thing\\"\\A second line in /a.scss";' in css

    def test_comment_cannot_be_closed_early(self) -> None:
        css = render_error_css(CompileError("unexpected */ here"), "/a.scss")

        comment, rule = css.split("\n*/\n", 1)
        assert "*/" not in comment
        assert "unexpected * / here" in comment
        assert rule.startswith("body:before")
