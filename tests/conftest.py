"""
pytest configuration and shared fixtures for chassisgen tests.

Fixtures
--------
boilerplate : Path
    A local stand-in for the Chassis boilerplate repository.

fake_run : FakeRun
    Replacement for ``subprocess.run`` in the generator that "clones" the
    local boilerplate and answers ``git config`` / ``npm`` calls.
"""

import json
import shutil
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest


SAMPLE_MANIFEST = {
    "name": "chassis-boilerplate",
    "version": "1.0.0",
    "description": "NGN Chassis boilerplate.",
    "scripts": {"start": "node ./build/dev.js"},
    "devDependencies": {"node-sass": "^4.5.0"},
}

SAMPLE_INDEX_HTML = """<!DOCTYPE html>
<html>
\t<head>
\t\t<title>NGN Chassis Template</title>
\t\t<link rel="stylesheet" href="./css/main.css">
\t\t<script src="https://cdn.author.io/ngn/latest/chassis.min.js"></script>
\t\t<!-- LIVERELOAD -->
\t</head>
\t<body class="ngn chassis template">
\t\t<h1>NGN Chassis Showroom</h1>
\t</body>
</html>
"""

SAMPLE_MAIN_SCSS = """@import 'variables';

.template {
  margin: 0;
  padding: 0;
}
"""


@pytest.fixture
def boilerplate(tmp_path: Path) -> Path:
    """
    Create a minimal copy of the boilerplate repository.

    Returns
    -------
    Path
        Directory containing package.json, src/index.html, sass/main.scss
        and a .git directory.
    """
    source = tmp_path / "boilerplate"
    (source / "src").mkdir(parents=True)
    (source / "sass").mkdir()
    (source / ".git" / "objects").mkdir(parents=True)

    (source / "package.json").write_text(json.dumps(SAMPLE_MANIFEST, indent=2))
    (source / "src" / "index.html").write_text(SAMPLE_INDEX_HTML)
    (source / "sass" / "main.scss").write_text(SAMPLE_MAIN_SCSS)
    (source / ".git" / "HEAD").write_text("ref: refs/heads/master\n")

    return source


class FakeRun:
    """
    Stand-in for ``subprocess.run`` that records every call.

    ``git clone`` copies the boilerplate into the target directory;
    ``git config`` answers from ``git_config``; other commands succeed
    unless listed in ``failures``.
    """

    def __init__(self, boilerplate: Path) -> None:
        self.boilerplate = boilerplate
        self.calls: list[tuple[list[str], Path | None]] = []
        self.git_config: dict[str, str] = {
            "user.name": "Jane Doe",
            "user.email": "jane@example.com",
        }
        self.failures: set[str] = set()

    def __call__(self, args, cwd=None, check=False, **kwargs):
        args = list(args)
        self.calls.append((args, cwd))
        program = " ".join(args[:2])

        if program in self.failures:
            if check:
                raise subprocess.CalledProcessError(1, args, output="", stderr=f"{program} exploded")
            return subprocess.CompletedProcess(args, 1, stdout="", stderr=f"{program} exploded")

        if program == "git clone":
            shutil.copytree(self.boilerplate, args[-1])
        elif program == "git config":
            value = self.git_config.get(args[-1])
            if value is None:
                return subprocess.CompletedProcess(args, 1, stdout="", stderr="")
            return subprocess.CompletedProcess(args, 0, stdout=f"{value}\n", stderr="")

        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

    def commands(self) -> list[str]:
        return [" ".join(args[:2]) for args, _ in self.calls]


@pytest.fixture
def fake_run(boilerplate: Path):
    """Patch the generator's subprocess.run with a FakeRun."""
    runner = FakeRun(boilerplate)
    with patch("chassisgen.generator.subprocess.run", side_effect=runner):
        yield runner


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: marks tests that run the whole pipeline"
    )
