"""Compiler contract shared by the engine and compiler adapters."""

from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from typing import Protocol


@dataclass
class CompileOutput:
    """Successful compile: stylesheet text plus every file it pulled in."""

    css: str
    included_files: list[str] = field(default_factory=list)


class Compiler(Protocol):
    """Callable turning Sass source text into CSS.

    Implementations raise CompileError when the input is rejected.
    """

    def __call__(self, text: str, include_paths: Sequence[str], output_style: str) -> CompileOutput: ...
