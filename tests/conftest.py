"""
Shared pytest fixtures for sassd test suite.

Provides fixtures for:
- Temporary storage directories
- Source/output directory layouts
- A deterministic fake compiler that tracks @import lines
- Settings and engines wired to the fake compiler
"""

import os
import re
import threading
import time
from collections.abc import AsyncGenerator
from collections.abc import Generator
from collections.abc import Sequence
from pathlib import Path

import pytest

from sass_library.cache import DependencyLedger
from sass_library.cache import RecompilationEngine
from sass_library.compiler import CompileOutput
from sass_library.config import SassSettings
from sass_library.errors import CompileError

_IMPORT_RE = re.compile(r'^\s*@import\s+"([^"]+)";\s*$')


class FakeCompiler:
    """Compiler double.

    Resolves ``@import "name";`` lines against the include paths (trying
    ``name``, ``_name.scss`` and ``name.scss``), inlines the imported files and
    reports them as included. A line containing ``!error`` raises CompileError
    with its line number.
    """

    def __init__(self, delay: float = 0.0) -> None:
        self.calls: list[dict] = []
        self.delay = delay
        self._lock = threading.Lock()

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def __call__(self, text: str, include_paths: Sequence[str], output_style: str) -> CompileOutput:
        with self._lock:
            self.calls.append({"text": text, "include_paths": list(include_paths), "output_style": output_style})
        if self.delay:
            time.sleep(self.delay)

        included: list[str] = []
        lines: list[str] = []
        for number, line in enumerate(text.splitlines(), start=1):
            if "!error" in line:
                raise CompileError("Invalid CSS after \"!error\"", line=number, column=line.index("!error") + 1)
            match = _IMPORT_RE.match(line)
            if not match:
                lines.append(line)
                continue
            resolved = self._resolve(match.group(1), include_paths)
            if resolved is not None:
                included.append(resolved)
                lines.append(Path(resolved).read_text(encoding="utf-8"))

        return CompileOutput(css="\n".join(lines) + "\n", included_files=included)

    @staticmethod
    def _resolve(name: str, include_paths: Sequence[str]) -> str | None:
        directory, base = os.path.split(name)
        for include in include_paths:
            for candidate in (name, os.path.join(directory, f"_{base}.scss"), f"{name}.scss"):
                path = Path(include) / candidate
                if path.is_file():
                    return str(path.resolve())
        return None


def _set_mtime(path: Path, seconds: float) -> None:
    """Set both atime and mtime of path to an exact timestamp."""
    ns = int(seconds * 1_000_000_000)
    os.utime(path, ns=(ns, ns))


def _settle(source: Path, output: Path, imports: Sequence[Path] = (), base: float | None = None) -> float:
    """Make output strictly newer than source and imports; return the output time."""
    base = base if base is not None else time.time() - 1000
    _set_mtime(source, base)
    for path in imports:
        _set_mtime(path, base)
    _set_mtime(output, base + 10)
    return base + 10


@pytest.fixture
def temp_storage_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create temporary storage directory for tests."""
    storage = tmp_path / "sassd-home"
    storage.mkdir()
    yield storage


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point SASSD_HOME at a temp directory and clear SASSD_* overrides.

    Ensures tests use isolated storage and don't pick up real configuration.
    """
    for key in list(os.environ):
        if key.startswith("SASSD_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("SASSD_HOME", str(temp_storage_dir))
    return temp_storage_dir


@pytest.fixture
def styles(tmp_path: Path) -> dict[str, Path]:
    """Source and destination directories with a small stylesheet tree.

    src/
      test.scss        body { color: red; }
      index.scss       @import "partials/colors"; + rule
      partials/_colors.scss
    """
    src = tmp_path / "src"
    dest = tmp_path / "public"
    (src / "partials").mkdir(parents=True)
    dest.mkdir()

    (src / "test.scss").write_text("body { color: red; }\n", encoding="utf-8")
    (src / "partials" / "_colors.scss").write_text(".primary { color: blue; }\n", encoding="utf-8")
    (src / "index.scss").write_text('@import "partials/colors";\n.index { margin: 0; }\n', encoding="utf-8")

    return {"src": src, "dest": dest, "partial": src / "partials" / "_colors.scss"}


@pytest.fixture(name="set_mtime")
def set_mtime_fixture():
    """Function setting an exact mtime (seconds) on a path."""
    return _set_mtime


@pytest.fixture(name="settle")
def settle_fixture():
    """Function making an output strictly newer than its inputs."""
    return _settle


@pytest.fixture
def fake_compiler() -> FakeCompiler:
    return FakeCompiler()


@pytest.fixture
def slow_compiler() -> FakeCompiler:
    """Fake compiler that holds each compile long enough for requests to overlap."""
    return FakeCompiler(delay=0.05)


@pytest.fixture
def settings(styles: dict[str, Path], mock_storage_env: Path) -> SassSettings:
    return SassSettings(src=str(styles["src"]), dest=str(styles["dest"]))


@pytest.fixture
def ledger() -> DependencyLedger:
    return DependencyLedger()


@pytest.fixture
async def engine(
    ledger: DependencyLedger, fake_compiler: FakeCompiler, settings: SassSettings
) -> AsyncGenerator[RecompilationEngine, None]:
    """Engine wired to the fake compiler; background writes are awaited on teardown."""
    engine = RecompilationEngine(ledger=ledger, compiler=fake_compiler, settings=settings)
    yield engine
    await engine.drain()
