"""
chassisgen.generator - Project Materialization
==============================================

This module turns a finished ``AnswerRecord`` into a working NGN Chassis
project on disk. It clones the boilerplate repository and rewrites the few
files that carry the template's identity.

Architecture
------------
The generator follows a pipeline pattern; every step depends on the
previous one having succeeded:

    1. Prepare the destination (delete on overwrite, create parents)
    2. Clone the boilerplate repository
    3. Customize package.json
    4. Customize src/index.html
    5. Customize sass/main.scss
    6. Remove the boilerplate's git metadata
    7. Install npm dependencies
    8. Print next steps

Nothing is rolled back when a step fails. The half-built directory stays
on disk so it can be inspected, and the error is re-raised.

Usage Example
-------------
>>> from chassisgen.generator import create_project
>>> from chassisgen.models import AnswerRecord
>>>
>>> answers = AnswerRecord(name="myapp", root="./myapp", data=True)
>>> result = create_project(answers)
>>> print(result.project_path)
PosixPath('/current/dir/myapp')

See Also
--------
- prompts.py: Builds the AnswerRecord interactively
- models.py: AnswerRecord and WebComponent
"""

from __future__ import annotations

import json
import re
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

from chassisgen.models import ManifestAuthor


if TYPE_CHECKING:
    from collections.abc import Sequence

    from chassisgen.models import AnswerRecord


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Console for rich output
console = Console()

GIT_REPO = "https://github.com/ngnjs/chassis-boilerplate.git"

# Files rewritten inside the cloned boilerplate, relative to the root
MANIFEST_FILE = Path("package.json")
MARKUP_FILE = Path("src") / "index.html"
STYLESHEET_FILE = Path("sass") / "main.scss"
GIT_DIR = ".git"

# Literal markers present in the boilerplate's index.html
HEADING_PLACEHOLDER = "<h1>NGN Chassis Showroom</h1>"
TITLE_PATTERN = re.compile(r"<title.*/title>", re.IGNORECASE)
BODY_PLACEHOLDER = '<body class="ngn chassis template">'
LIVERELOAD_MARKER = "<!-- LIVERELOAD -->"

# Script references
SCRIPT_INDENT = "\n\t\t"
NGN_FULL_SCRIPT = '<script src="https://cdn.author.io/ngn/latest/chassis.min.js"></script>'
NGN_SLIM_SCRIPT = '<script src="https://cdn.author.io/ngn/latest/chassis.slim.min.js"></script>'
NGNX_SCRIPT = '<script src="https://cdn.author.io/ngnx/latest/chassis.x.min.js"></script>'
COMPONENTS_LOADER_SCRIPT = (
    '<script src="https://cdn.jsdelivr.net/webcomponentsjs/latest/webcomponents.min.js"></script>'
)

# Root selector in the boilerplate's main.scss
STYLESHEET_SELECTOR = ".template {"


# =============================================================================
# Errors and Results
# =============================================================================


class ToolError(RuntimeError):
    """An external command (git, npm) failed or could not be started."""

    def __init__(self, command: Sequence[str], detail: str) -> None:
        self.command = list(command)
        self.detail = detail.strip()
        message = f"'{' '.join(command)}' failed"
        if self.detail:
            message = f"{message}: {self.detail}"
        super().__init__(message)


@dataclass
class GenerationResult:
    """
    Outcome of a project generation run.

    Attributes
    ----------
    project_path : Path
        Absolute path of the generated project.

    created_dirs : list[Path]
        Parent directories that had to be created.

    files_modified : list[Path]
        Boilerplate files rewritten for this project.
    """

    project_path: Path
    created_dirs: list[Path] = field(default_factory=list)
    files_modified: list[Path] = field(default_factory=list)


# =============================================================================
# External Commands
# =============================================================================


def run_command(command: Sequence[str], cwd: Path | None = None) -> str:
    """
    Run an external command to completion and return its stdout.

    Raises
    ------
    ToolError
        If the command exits non-zero or the executable is missing.
    """
    try:
        completed = subprocess.run(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise ToolError(command, e.stderr or e.stdout or "") from e
    except FileNotFoundError as e:
        raise ToolError(command, f"{command[0]} is not installed") from e

    return completed.stdout


def read_git_config(key: str) -> str:
    """
    Read a global git config value.

    Unset keys and a missing git binary both read as an empty string.
    """
    try:
        completed = subprocess.run(
            ["git", "config", "--global", "--get", key],
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return ""

    if completed.returncode != 0:
        return ""

    return completed.stdout.strip()


# =============================================================================
# Destination
# =============================================================================


def make_parents(path: Path) -> list[Path]:
    """
    Create every missing ancestor of ``path``.

    Ancestors are walked from the filesystem root downward; existing
    directories are left alone. ``path`` itself is not created.

    Returns
    -------
    list[Path]
        Directories that were created, outermost first.
    """
    created: list[Path] = []

    for directory in reversed(path.parents):
        if directory.is_dir():
            continue
        directory.mkdir()
        created.append(directory)

    return created


def prepare_destination(answers: AnswerRecord) -> list[Path]:
    """
    Make the project root ready for cloning.

    Deletes an existing root (a directory tree, a file or a link) when the
    user agreed to overwrite it, then creates its missing parent
    directories.
    """
    root = answers.root
    if answers.overwrite:
        if root.is_dir() and not root.is_symlink():
            shutil.rmtree(root)
        elif root.exists() or root.is_symlink():
            root.unlink()

    return make_parents(root)


def clone_template(root: Path) -> None:
    run_command(["git", "clone", GIT_REPO, str(root)])


def strip_git_metadata(root: Path) -> None:
    git_dir = root / GIT_DIR
    if git_dir.exists():
        shutil.rmtree(git_dir)


def install_dependencies(root: Path) -> None:
    run_command(["npm", "install"], cwd=root)


# =============================================================================
# Manifest
# =============================================================================


def customize_manifest(answers: AnswerRecord) -> dict:
    """
    Rewrite package.json with the project's identity.

    Sets ``name``, ``description``, ``private`` and ``author``; all other
    keys are kept in their original order.

    Returns
    -------
    dict
        The manifest as written.
    """
    manifest_path = answers.root / MANIFEST_FILE
    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))

    author = ManifestAuthor.from_git_identity(
        read_git_config("user.name"),
        read_git_config("user.email"),
    )

    manifest["name"] = answers.package_name
    manifest["description"] = f"{answers.name} web app."
    manifest["private"] = True
    manifest["author"] = author.to_manifest()

    manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")

    return manifest


# =============================================================================
# Markup
# =============================================================================


def build_script_block(answers: AnswerRecord) -> str:
    """
    Assemble the script tags that replace the livereload marker.

    The marker itself is kept at the head of the block.

    Examples
    --------
    >>> answers = AnswerRecord(name="app", root="/tmp/app", ngnx=True)
    >>> build_script_block(answers).splitlines()[0]
    '<!-- LIVERELOAD -->'
    """
    block = LIVERELOAD_MARKER

    if answers.ngnx:
        block += SCRIPT_INDENT + NGNX_SCRIPT

    if answers.wc:
        block += SCRIPT_INDENT + COMPONENTS_LOADER_SCRIPT
        for component in answers.wc:
            block += SCRIPT_INDENT + f'<script src="{component.script_url}"></script>'

    return block


def render_markup(content: str, answers: AnswerRecord) -> str:
    """
    Personalize the boilerplate's index.html.

    Parameters
    ----------
    content : str
        Original index.html text.

    answers : AnswerRecord
        Collected answers.

    Returns
    -------
    str
        The rewritten document. Each placeholder is replaced at its first
        occurrence only.
    """
    content = content.replace(HEADING_PLACEHOLDER, f"<h1>{answers.name}</h1>", 1)
    # Callable replacement: the name is inserted literally, backslashes included
    content = TITLE_PATTERN.sub(lambda _: f"<title>{answers.name}</title>", content, count=1)
    content = content.replace(
        BODY_PLACEHOLDER,
        f'<body class="ngn chassis {answers.package_name}">',
        1,
    )

    if not answers.ngnx and not answers.uses_data_layer:
        content = content.replace(NGN_FULL_SCRIPT, NGN_SLIM_SCRIPT, 1)

    return content.replace(LIVERELOAD_MARKER, build_script_block(answers), 1)


def customize_markup(answers: AnswerRecord) -> Path:
    markup_path = answers.root / MARKUP_FILE
    content = markup_path.read_text(encoding="utf-8")
    markup_path.write_text(render_markup(content, answers), encoding="utf-8")
    return markup_path


# =============================================================================
# Stylesheet
# =============================================================================


def render_stylesheet(content: str, package_name: str) -> str:
    return content.replace(STYLESHEET_SELECTOR, f".{package_name} {{", 1)


def customize_stylesheet(answers: AnswerRecord) -> Path:
    stylesheet_path = answers.root / STYLESHEET_FILE
    content = stylesheet_path.read_text(encoding="utf-8")
    stylesheet_path.write_text(
        render_stylesheet(content, answers.package_name),
        encoding="utf-8",
    )
    return stylesheet_path


# =============================================================================
# Main Generation Function
# =============================================================================


def create_project(
    answers: AnswerRecord,
    *,
    verbose: bool = True,
) -> GenerationResult:
    """
    Generate a Chassis project from the collected answers.

    Parameters
    ----------
    answers : AnswerRecord
        Finalized answers from the prompt sequence.

    verbose : bool, default=True
        If True, print each step to the console.

    Returns
    -------
    GenerationResult
        Paths touched during generation.

    Raises
    ------
    ToolError
        If cloning or installing dependencies fails.
    OSError
        If the destination cannot be prepared or a file cannot be rewritten.

    Notes
    -----
    There is no cleanup on failure. Whatever was written before the
    failing step stays on disk.
    """
    root = answers.root
    result = GenerationResult(project_path=root)

    try:
        if verbose:
            console.print()
            console.print(
                Panel(
                    f"[bold blue]Creating project:[/] [green]{answers.name}[/]\n"
                    f"[dim]Location: {root}[/]",
                    title="[bold]chassisgen[/]",
                    border_style="blue",
                )
            )
            console.print()

        # Step 1: Prepare destination
        if answers.overwrite and verbose:
            console.print(f"[bold]🗑  Removing existing {root}...[/]")

        result.created_dirs = prepare_destination(answers)

        if verbose:
            for d in result.created_dirs:
                console.print(f"  Created {d}/")

        # Step 2: Clone boilerplate
        if verbose:
            console.print(f"[bold]📥 Executing[/] [dim]git clone {GIT_REPO} \"{root}\"[/]")

        clone_template(root)

        # Step 3: package.json
        if verbose:
            console.print("[dim]  Customizing package.json...[/]")

        customize_manifest(answers)
        result.files_modified.append(root / MANIFEST_FILE)

        # Step 4: index.html
        if verbose:
            console.print("[dim]  Customizing HTML template...[/]")

        result.files_modified.append(customize_markup(answers))

        # Step 5: main.scss
        if verbose:
            console.print("[dim]  Customizing SASS starter file...[/]")

        result.files_modified.append(customize_stylesheet(answers))

        # Step 6: git metadata
        if verbose:
            console.print("[dim]  Cleaning up git files...[/]")

        strip_git_metadata(root)

        # Step 7: npm install
        if verbose:
            console.print("[dim]  Setting up development environment...[/]")

        install_dependencies(root)

        if verbose:
            console.print("  [green]✓[/] Dependencies installed")
            console.print()
            console.print(
                Panel(
                    f"[bold green]✨ Project created successfully![/]\n\n"
                    f"[dim]Project Directory:[/] {root}\n\n"
                    f"[bold]Next steps:[/]\n"
                    f"  cd {root}\n"
                    f"  npm start\n\n"
                    f"[dim]For livereload alerts run[/] npm start --notify [dim]instead.[/]",
                    title="[bold green]Success[/]",
                    border_style="green",
                )
            )

    except Exception as e:
        if verbose:
            console.print(f"\n[bold red]Error:[/] {e}")
            console.print(f"[dim]The partial project was left at {root}.[/]")
        raise

    return result
