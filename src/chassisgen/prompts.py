"""
chassisgen.prompts - Interactive Question Sequence
==================================================

This module collects the answers that drive project generation. The
questions form a fixed, ordered list; each one may compute its default or
decide whether it is shown at all from the answers given so far.

Flow
----
    name -> root -> overwrite? -> mkdir? -> [directory guard]
         -> scope -> ngnx -> data? -> wc

Defaults and visibility are plain functions of the partial answers and are
evaluated only when the question is reached. The directory guard does not
prompt; it returns an ``Abort`` from ``collect`` when neither an overwrite
nor a mkdir was accepted for a destination that needed one.

Usage
-----
>>> from chassisgen.prompts import collect
>>> outcome = collect()
>>> if isinstance(outcome, Abort):
...     print(outcome.message)

Tests pass their own ``ask`` callable instead of the questionary-backed
``ask_question``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import questionary
import typer

from chassisgen.models import AnswerRecord, WebComponent, resolve_root, sanitize_identifier


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    Answers = dict[str, Any]


# =============================================================================
# Step Definitions
# =============================================================================

class QuestionKind(str, Enum):
    """How a question is rendered."""

    TEXT = "text"
    CONFIRM = "confirm"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class Question:
    """
    A single prompt in the sequence.

    Attributes
    ----------
    key : str
        Answer key the response is stored under.

    message : str
        Prompt text shown to the user.

    kind : QuestionKind
        Text input, yes/no confirmation or multi-select.

    default : Any
        Constant default, or a function of the answers collected so far.

    when : Callable | None
        Visibility predicate. When it returns False the question is
        skipped and ``key`` stays absent from the answers.

    choices : tuple[WebComponent, ...]
        Options for checkbox questions.

    validate : Callable | None
        Text validator in questionary's convention: return True, or an
        error message to show.
    """

    key: str
    message: str
    kind: QuestionKind = QuestionKind.TEXT
    default: Any = None
    when: Callable[[Answers], bool] | None = None
    choices: tuple[WebComponent, ...] = field(default_factory=tuple)
    validate: Callable[[str], bool | str] | None = None

    def resolve_default(self, answers: Answers) -> Any:
        if callable(self.default):
            return self.default(answers)
        return self.default

    def is_visible(self, answers: Answers) -> bool:
        return self.when is None or self.when(answers)


@dataclass(frozen=True)
class Guard:
    """
    A non-interactive step that can stop the sequence.

    ``check`` returns an abort message, or None to continue.
    """

    check: Callable[[Answers], str | None]


@dataclass(frozen=True)
class Abort:
    """Returned by ``collect`` when a guard stops the run."""

    message: str


# =============================================================================
# Filesystem Probes
# =============================================================================
# Probe failures of any kind count as "does not exist" / "not accessible".

def root_exists(answers: Answers) -> bool:
    """Whether the chosen project root is already on disk."""
    try:
        return os.access(resolve_root(answers["root"]), os.F_OK)
    except (OSError, ValueError):
        return False


def parent_readable(answers: Answers) -> bool:
    """Whether the parent of the chosen project root can be read."""
    try:
        return os.access(resolve_root(answers["root"]).parent, os.R_OK)
    except (OSError, ValueError):
        return False


# =============================================================================
# Defaults, Predicates and Validators
# =============================================================================

def default_root(answers: Answers) -> str:
    return str(resolve_root(Path.cwd() / answers["name"].strip()))


def default_scope(answers: Answers) -> str:
    return sanitize_identifier(answers["name"])


def needs_mkdir(answers: Answers) -> bool:
    if answers.get("overwrite"):
        return False
    return not parent_readable(answers)


def wants_data_layer_question(answers: Answers) -> bool:
    return not answers.get("ngnx")


def check_directory(answers: Answers) -> str | None:
    """
    Abort when a directory decision was asked for and declined.

    A destination is usable if nothing had to be asked (the root can simply
    be created) or if the user accepted overwriting or creating it.
    """
    asked = "overwrite" in answers or "mkdir" in answers
    accepted = answers.get("overwrite") or answers.get("mkdir")
    if asked and not accepted:
        return "No valid directory selected. Aborting."
    return None


def validate_name(value: str) -> bool | str:
    value = value.strip()
    if not value:
        return "Please enter a project name."
    if not sanitize_identifier(value):
        return "The name needs at least one letter, digit, '-' or '_'."
    return True


# =============================================================================
# Question Sequence
# =============================================================================

QUESTIONS: list[Question | Guard] = [
    Question(
        key="name",
        message="Project Name:",
        default="myapp",
        validate=validate_name,
    ),
    Question(
        key="root",
        message="Project Root:",
        default=default_root,
    ),
    Question(
        key="overwrite",
        message="That directory already exists. Do you want to overwrite it?",
        kind=QuestionKind.CONFIRM,
        default=False,
        when=root_exists,
    ),
    Question(
        key="mkdir",
        message="The root directory does not exist. Do you want to create it?",
        kind=QuestionKind.CONFIRM,
        default=True,
        when=needs_mkdir,
    ),
    Guard(check=check_directory),
    Question(
        key="scope",
        message="CSS Scope:",
        default=default_scope,
    ),
    Question(
        key="ngnx",
        message="Do you want to use the NGN extension library? (Drivers, Loaders, State Mgmt)",
        kind=QuestionKind.CONFIRM,
        default=False,
    ),
    Question(
        key="data",
        message="Do you want to use NGN data models/stores in your app?",
        kind=QuestionKind.CONFIRM,
        default=True,
        when=wants_data_layer_question,
    ),
    Question(
        key="wc",
        message=(
            "Which of the following (if any) Chassis web components would you like to use? "
            "(http://ngnjs.github.io/chassis-components/documentation/)"
        ),
        kind=QuestionKind.CHECKBOX,
        choices=tuple(WebComponent),
    ),
]


# =============================================================================
# Prompting
# =============================================================================

def ask_question(question: Question, default: Any) -> Any:
    """
    Ask one question on the terminal with questionary.

    Parameters
    ----------
    question : Question
        The question to render.

    default : Any
        Default already resolved against the current answers.

    Returns
    -------
    Any
        str for text questions, bool for confirmations and a list of
        WebComponent for checkboxes.

    Raises
    ------
    typer.Abort
        If the prompt was cancelled (Ctrl-C).
    """
    if question.kind is QuestionKind.CONFIRM:
        prompt = questionary.confirm(question.message, default=bool(default))
    elif question.kind is QuestionKind.CHECKBOX:
        prompt = questionary.checkbox(
            question.message,
            choices=[
                questionary.Choice(title=choice.label, value=choice)
                for choice in question.choices
            ],
        )
    else:
        prompt = questionary.text(
            question.message,
            default="" if default is None else str(default),
            validate=question.validate,
        )

    result = prompt.ask()

    if result is None:
        raise typer.Abort()

    return result


def collect(
    ask: Callable[[Question, Any], Any] = ask_question,
    steps: Sequence[Question | Guard] = QUESTIONS,
) -> AnswerRecord | Abort:
    """
    Run the question sequence and build the answer record.

    Parameters
    ----------
    ask : Callable
        Receives each visible question and its resolved default, returns
        the user's answer.

    steps : Sequence[Question | Guard]
        Questions and guards in presentation order.

    Returns
    -------
    AnswerRecord | Abort
        The finalized answers, or the abort raised by a guard. No partial
        record is ever returned.
    """
    answers: Answers = {}

    for step in steps:
        if isinstance(step, Guard):
            message = step.check(answers)
            if message is not None:
                return Abort(message)
            continue

        if not step.is_visible(answers):
            continue

        answers[step.key] = ask(step, step.resolve_default(answers))

    return AnswerRecord.model_validate(answers)
