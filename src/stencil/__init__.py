"""Interactive project scaffolding from local template directories.

The package asks for a project name and a template, then copies
``./templates/<template>`` into ``./<project name>`` while leaving out
``node_modules``, ``build`` and ``dist`` directories, and finally runs
``npm install`` when the template ships a ``package.json``.
"""

from __future__ import annotations

from .config import (
    InstallScope,
    ScaffoldSettings,
    SymlinkPolicy,
    TemplateChoice,
    resolve_paths,
)
from .errors import (
    InstallError,
    ProjectExistsError,
    PromptAborted,
    PromptError,
    StencilError,
    TemplateNotFoundError,
)
from .naming import is_safe_path_segment, project_name_problem, slugify
from .prompts import Answers, collect_answers
from .replicate import EntryKind, InstallResult, ReplicationReport, TemplateReplicator

__all__ = [
    "Answers",
    "EntryKind",
    "InstallError",
    "InstallResult",
    "InstallScope",
    "ProjectExistsError",
    "PromptAborted",
    "PromptError",
    "ReplicationReport",
    "ScaffoldSettings",
    "StencilError",
    "SymlinkPolicy",
    "TemplateChoice",
    "TemplateNotFoundError",
    "TemplateReplicator",
    "collect_answers",
    "is_safe_path_segment",
    "project_name_problem",
    "resolve_paths",
    "slugify",
]

__version__ = "0.1.0"
