"""Copy a template directory tree into a freshly created project directory."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterator

from .config import InstallScope, ScaffoldSettings, SymlinkPolicy
from .errors import InstallError, ProjectExistsError, TemplateNotFoundError

__all__ = [
    "EntryKind",
    "InstallResult",
    "ReplicationReport",
    "SkippedEntry",
    "TemplateReplicator",
    "classify",
]

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


class EntryKind(str, Enum):
    """Exhaustive classification of a directory entry."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


def classify(path: Path, *, follow_symlinks: bool = False) -> EntryKind:
    """Return the :class:`EntryKind` of ``path`` without following links by default."""

    mode = path.stat().st_mode if follow_symlinks else path.lstat().st_mode
    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.OTHER


@dataclass(frozen=True, slots=True)
class SkippedEntry:
    """A template entry that produced no output, with the reason why."""

    path: Path
    reason: str


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Outcome of one dependency install invocation."""

    command: tuple[str, ...]
    cwd: Path
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


@dataclass(slots=True)
class ReplicationReport:
    """Everything a replication run created, skipped and executed."""

    template_path: Path
    project_path: Path
    files: list[Path] = field(default_factory=list)
    directories: list[Path] = field(default_factory=list)
    symlinks: list[Path] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    installs: list[InstallResult] = field(default_factory=list)

    @property
    def install(self) -> InstallResult | None:
        """The first install invocation, if any ran."""

        return self.installs[0] if self.installs else None

    @property
    def failed_installs(self) -> list[InstallResult]:
        return [result for result in self.installs if not result.succeeded]


@dataclass(slots=True)
class _Frame:
    entries: Iterator[Path]
    destination: Path
    real_source: Path


def _is_within(path: Path, ancestor: Path) -> bool:
    return path == ancestor or path.is_relative_to(ancestor)


class TemplateReplicator:
    """Copy template trees honouring the skip-list, then run the install step."""

    def __init__(
        self,
        settings: ScaffoldSettings | None = None,
        *,
        runner: Runner | None = None,
    ) -> None:
        self.settings = settings or ScaffoldSettings()
        self.runner: Runner = runner or subprocess.run

    def replicate(self, template_path: str | Path, project_path: str | Path) -> ReplicationReport:
        """Copy ``template_path`` into the new directory ``project_path``.

        Raises :class:`TemplateNotFoundError` when the template is not a
        directory and :class:`ProjectExistsError` when ``project_path`` is
        already present; in both cases nothing is written. File system errors
        raised while copying propagate unchanged and leave the partially
        populated project in place.
        """

        template_path = Path(template_path)
        project_path = Path(project_path)
        if not template_path.is_dir():
            raise TemplateNotFoundError(template_path)
        if project_path.exists() or project_path.is_symlink():
            raise ProjectExistsError(project_path)

        project_path.mkdir()
        LOGGER.debug("created project directory %s", project_path)

        report = ReplicationReport(template_path=template_path, project_path=project_path)
        manifest_dirs: list[Path] = []
        self._copy_tree(report, manifest_dirs)

        install_dirs = manifest_dirs
        if self.settings.install_scope is InstallScope.ROOT:
            install_dirs = [path for path in manifest_dirs if path == project_path]
        for directory in install_dirs:
            report.installs.append(self._install(directory))

        return report

    def _listing(self, source_dir: Path, report: ReplicationReport) -> Iterator[Path]:
        entries = []
        for entry in sorted(source_dir.iterdir(), key=lambda path: path.name):
            if entry.name in self.settings.skip_names:
                LOGGER.debug("skipping %s (skip-list)", entry)
                report.skipped.append(SkippedEntry(entry, "skip-list"))
                continue
            entries.append(entry)
        return iter(entries)

    def _copy_tree(self, report: ReplicationReport, manifest_dirs: list[Path]) -> None:
        root = report.template_path
        stack = [
            _Frame(
                self._listing(root, report),
                report.project_path,
                root.resolve(),
            )
        ]

        while stack:
            frame = stack[-1]
            source = next(frame.entries, None)
            if source is None:
                stack.pop()
                continue

            destination = frame.destination / source.name
            kind = classify(source)
            if kind is EntryKind.SYMLINK:
                resolved = self._handle_symlink(source, destination, report, stack)
                if resolved is None:
                    if destination.is_symlink() and source.is_file():
                        self._note_manifest(source, frame.destination, manifest_dirs)
                    continue
                kind = resolved

            if kind is EntryKind.FILE:
                shutil.copyfile(source, destination)
                LOGGER.debug("copied %s -> %s", source, destination)
                report.files.append(destination)
                self._note_manifest(source, frame.destination, manifest_dirs)
            elif kind is EntryKind.DIRECTORY:
                destination.mkdir()
                report.directories.append(destination)
                stack.append(
                    _Frame(
                        self._listing(source, report),
                        destination,
                        source.resolve(),
                    )
                )
            else:
                LOGGER.warning("not copying %s: unsupported file type", source)
                report.skipped.append(SkippedEntry(source, "unsupported"))

    def _handle_symlink(
        self,
        source: Path,
        destination: Path,
        report: ReplicationReport,
        stack: list[_Frame],
    ) -> EntryKind | None:
        """Apply the symlink policy; return the kind to copy when following the link."""

        policy = self.settings.symlink_policy
        if policy is SymlinkPolicy.SKIP:
            LOGGER.debug("skipping symlink %s", source)
            report.skipped.append(SkippedEntry(source, "symlink"))
            return None

        if policy is SymlinkPolicy.COPY:
            target = os.readlink(source)
            os.symlink(target, destination, target_is_directory=source.is_dir())
            LOGGER.debug("linked %s -> %s", destination, target)
            report.symlinks.append(destination)
            return None

        if not source.exists():
            LOGGER.warning("not copying %s: broken symlink", source)
            report.skipped.append(SkippedEntry(source, "broken-symlink"))
            return None

        kind = classify(source, follow_symlinks=True)
        if kind is EntryKind.DIRECTORY:
            real = source.resolve()
            if any(frame.real_source == real for frame in stack):
                LOGGER.warning("not copying %s: symlink points at one of its parents", source)
                report.skipped.append(SkippedEntry(source, "symlink-cycle"))
                return None
            if _is_within(report.project_path.resolve(), real):
                LOGGER.warning("not copying %s: symlink target contains the project directory", source)
                report.skipped.append(SkippedEntry(source, "contains-destination"))
                return None
        return kind

    def _note_manifest(self, source: Path, directory: Path, manifest_dirs: list[Path]) -> None:
        if source.name == self.settings.manifest_name:
            manifest_dirs.append(directory)

    def _install(self, directory: Path) -> InstallResult:
        command = tuple(self.settings.install_command)
        LOGGER.info("running '%s' in %s", " ".join(command), directory)
        try:
            completed = self.runner(list(command), cwd=directory, check=False)
        except FileNotFoundError as exc:
            raise InstallError(command, str(exc)) from exc

        result = InstallResult(command=command, cwd=directory, returncode=completed.returncode)
        if not result.succeeded:
            LOGGER.warning(
                "'%s' exited with status %s in %s",
                " ".join(command),
                result.returncode,
                directory,
            )
        return result
