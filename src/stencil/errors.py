"""Exception types raised by the stencil scaffolder."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "InstallError",
    "ProjectExistsError",
    "PromptAborted",
    "PromptError",
    "StencilError",
    "TemplateNotFoundError",
]


class StencilError(RuntimeError):
    """Base class for failures the command line interface reports to users."""


class PromptAborted(StencilError):
    """Raised when the user abandons the interactive prompts."""

    def __init__(self, message: str = "prompt aborted by user") -> None:
        super().__init__(message)


class PromptError(StencilError):
    """Raised when the terminal cannot deliver an answer to a prompt."""


class TemplateNotFoundError(StencilError):
    """Raised when the selected template directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Template directory not found: {path}")


class ProjectExistsError(StencilError):
    """Raised when the destination project directory is already present."""

    message = "Directory already exists. Choose another name"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(self.message)


class InstallError(StencilError):
    """Raised when the dependency install command cannot be started."""

    def __init__(self, command: tuple[str, ...], reason: str) -> None:
        self.command = command
        super().__init__(f"could not run '{' '.join(command)}': {reason}")
