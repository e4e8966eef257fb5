"""Command line interface for the stencil scaffolder."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from . import __version__
from .config import ScaffoldSettings, resolve_paths
from .errors import ProjectExistsError, StencilError
from .prompts import Reader, collect_answers
from .replicate import TemplateReplicator

LOGGER = logging.getLogger("stencil")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stencil",
        description="Create a new project by copying one of the templates in ./templates",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every copied entry",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(
    settings: ScaffoldSettings | None = None,
    *,
    cwd: Path | None = None,
    read: Reader | None = None,
    replicator: TemplateReplicator | None = None,
) -> int:
    """Prompt, resolve the paths and replicate. Returns the process exit code."""

    settings = settings or ScaffoldSettings()
    try:
        answers = collect_answers(settings.choices, read=read or input)
    except (StencilError, ValidationError) as exc:
        LOGGER.error("%s", exc)
        return 1

    template_path, project_path = resolve_paths(answers, cwd=cwd, settings=settings)
    replicator = replicator or TemplateReplicator(settings)
    try:
        report = replicator.replicate(template_path, project_path)
    except ProjectExistsError as exc:
        print(exc, file=sys.stderr)
        return 1
    except StencilError as exc:
        LOGGER.error("%s", exc)
        return 1

    for result in report.failed_installs:
        print(
            f"warning: '{' '.join(result.command)}' exited with status {result.returncode} in {result.cwd}",
            file=sys.stderr,
        )
    print(f"Project created at {report.project_path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return run()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
