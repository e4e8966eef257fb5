"""Settings shared by the prompt collector, the replicator and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .prompts import Answers

__all__ = [
    "DEFAULT_CHOICES",
    "DEFAULT_SKIP_NAMES",
    "InstallScope",
    "ScaffoldSettings",
    "SymlinkPolicy",
    "TemplateChoice",
    "resolve_paths",
]


class InstallScope(str, Enum):
    """Where the dependency install step is allowed to run."""

    ROOT = "root"
    EVERY_MANIFEST = "every-manifest"


class SymlinkPolicy(str, Enum):
    """How symbolic links found inside a template are reproduced."""

    COPY = "copy"
    FOLLOW = "follow"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class TemplateChoice:
    """A selectable template: ``title`` is shown, ``value`` names the directory."""

    title: str
    value: str


DEFAULT_CHOICES: tuple[TemplateChoice, ...] = (
    TemplateChoice(title="Simple Project One", value="simple-project-one"),
    TemplateChoice(title="Simple Project Two", value="simple-project-two"),
)

DEFAULT_SKIP_NAMES: frozenset[str] = frozenset({"node_modules", "build", "dist"})


@dataclass(frozen=True, slots=True)
class ScaffoldSettings:
    """Knobs controlling a scaffolding run.

    Attributes
    ----------
    templates_dir_name:
        Directory, relative to the working directory, holding the templates.
    skip_names:
        Entry names excluded from the copy at every directory level.
    manifest_name:
        File whose presence triggers the install step.
    install_command:
        Command executed inside the new project when a manifest is present.
    install_scope:
        Whether the install step runs for the root manifest only or for every
        copied directory containing a manifest.
    symlink_policy:
        How symbolic links inside templates are handled.
    choices:
        The closed set of templates offered by the prompt.
    """

    templates_dir_name: str = "templates"
    skip_names: frozenset[str] = DEFAULT_SKIP_NAMES
    manifest_name: str = "package.json"
    install_command: tuple[str, ...] = ("npm", "install")
    install_scope: InstallScope = InstallScope.ROOT
    symlink_policy: SymlinkPolicy = SymlinkPolicy.COPY
    choices: tuple[TemplateChoice, ...] = field(default=DEFAULT_CHOICES)


def resolve_paths(
    answers: "Answers",
    *,
    cwd: str | Path | None = None,
    settings: ScaffoldSettings | None = None,
) -> tuple[Path, Path]:
    """Return absolute ``(template_path, project_path)`` for ``answers``.

    Both paths are anchored at ``cwd`` (the current working directory by
    default), never at the location of the installed package.
    """

    settings = settings or ScaffoldSettings()
    base = Path(cwd) if cwd is not None else Path.cwd()
    base = base.expanduser().resolve()

    template_path = base / settings.templates_dir_name / answers.template_name
    project_path = base / answers.project_name
    return template_path, project_path
