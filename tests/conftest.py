from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class RecordingRunner:
    """Stand-in for :func:`subprocess.run` that records every invocation."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[dict[str, Any]] = []

    def __call__(self, args: list[str], **kwargs: Any) -> subprocess.CompletedProcess[Any]:
        self.calls.append({"args": list(args), **kwargs})
        return subprocess.CompletedProcess(args, self.returncode)


class ScriptedInput:
    """Feeds prepared answers to code expecting :func:`input`."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)


def _write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


def _relative_entries(root: Path) -> set[str]:
    return {path.relative_to(root).as_posix() for path in root.rglob("*")}


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def failing_runner() -> RecordingRunner:
    return RecordingRunner(returncode=1)


@pytest.fixture()
def scripted_input() -> type[ScriptedInput]:
    return ScriptedInput


@pytest.fixture()
def write_tree() -> Callable[[Path, dict[str, str | bytes]], Path]:
    """Return a helper creating ``{relative path: content}`` files underneath a root."""

    return _write_tree


@pytest.fixture()
def relative_entries() -> Callable[[Path], set[str]]:
    return _relative_entries
