"""Interactive collection of the project name and template choice."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .config import DEFAULT_CHOICES, TemplateChoice
from .errors import PromptAborted, PromptError
from .naming import project_name_problem

__all__ = [
    "Answers",
    "SelectQuestion",
    "TextQuestion",
    "collect_answers",
]

Reader = Callable[[str], str]
Writer = Callable[[str], None]

PROJECT_NAME_MESSAGE = "What is the name of your new project ."
TEMPLATE_MESSAGE = "Which template do you want to generate"


class Answers(BaseModel):
    """Validated answers gathered from the user.

    Template identifiers are checked against the ``choices`` entry of the
    validation context when one is supplied.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, str_strip_whitespace=True)

    project_name: str = Field(..., description="Name of the directory to create.")
    template_name: str = Field(..., description="Identifier of the template to copy.")

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        problem = project_name_problem(value)
        if problem is not None:
            raise ValueError(problem)
        return value

    @field_validator("template_name")
    @classmethod
    def _check_template_name(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            raise ValueError("Template name is required")
        allowed = (info.context or {}).get("choices")
        if allowed is not None and value not in allowed:
            raise ValueError(f"unknown template '{value}'")
        return value


@dataclass(frozen=True, slots=True)
class TextQuestion:
    """Free text question whose answer is validated before it is accepted."""

    name: str
    message: str
    validate: Callable[[str], str | None]

    def ask(self, read: Reader, write: Writer) -> str:
        while True:
            raw = _read(read, f"? {self.message} ")
            problem = self.validate(raw)
            if problem is None:
                return raw.strip()
            write(f"  {problem}")


@dataclass(frozen=True, slots=True)
class SelectQuestion:
    """Numbered single choice question returning the selected ``value``."""

    name: str
    message: str
    choices: Sequence[TemplateChoice]

    def resolve(self, raw: str) -> str | None:
        """Map a typed number, identifier or title onto a choice value."""

        text = raw.strip()
        if text.isdigit():
            index = int(text)
            if 1 <= index <= len(self.choices):
                return self.choices[index - 1].value
            return None
        lowered = text.casefold()
        for choice in self.choices:
            if lowered in (choice.value.casefold(), choice.title.casefold()):
                return choice.value
        return None

    def ask(self, read: Reader, write: Writer) -> str:
        write(f"? {self.message}")
        for position, choice in enumerate(self.choices, 1):
            write(f"  {position}) {choice.title}")
        while True:
            raw = _read(read, "  Enter a number: ")
            if not raw.strip():
                write("  Template name is required")
                continue
            value = self.resolve(raw)
            if value is not None:
                return value
            write("  Choose one of the listed templates")


def _read(read: Reader, prompt: str) -> str:
    try:
        return read(prompt)
    except (EOFError, KeyboardInterrupt) as exc:
        raise PromptAborted() from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise PromptError(f"could not read answer: {exc}") from exc


def _print(text: str) -> None:
    print(text, flush=True)


def collect_answers(
    choices: Sequence[TemplateChoice] = DEFAULT_CHOICES,
    *,
    read: Reader = input,
    write: Writer = _print,
) -> Answers:
    """Ask for a project name and a template and return validated :class:`Answers`.

    Invalid input is reported through ``write`` and asked again. Raises
    :class:`~stencil.errors.PromptAborted` when input ends or is interrupted,
    in which case no answers are produced, and
    :class:`~stencil.errors.PromptError` when the terminal cannot be read.
    """

    if not choices:
        raise PromptError("at least one template choice is required")

    questions = (
        TextQuestion("project_name", PROJECT_NAME_MESSAGE, project_name_problem),
        SelectQuestion("template_name", TEMPLATE_MESSAGE, tuple(choices)),
    )
    responses = {question.name: question.ask(read, write) for question in questions}
    return Answers.model_validate(
        responses,
        context={"choices": {choice.value for choice in choices}},
    )
