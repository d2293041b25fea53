"""
chassisgen - NGN Chassis Project Generator
==========================================

An interactive command that scaffolds a new NGN Chassis web app. It asks a
handful of questions, clones the Chassis boilerplate and personalizes its
package.json, index.html and main.scss.

Quick Start
-----------
```bash
pip install chassisgen
chassisgen
```

Example
-------
>>> from chassisgen import AnswerRecord, create_project
>>> answers = AnswerRecord(name="myapp", root="./myapp", data=True)
>>> create_project(answers)

Architecture
------------
- ``cli``: Typer-based command line interface
- ``prompts``: Ordered, conditional question sequence
- ``generator``: Clone and customize the boilerplate
- ``models``: Pydantic models for the collected answers
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from chassisgen.generator import GenerationResult, ToolError, create_project
from chassisgen.models import AnswerRecord, WebComponent, sanitize_identifier
from chassisgen.prompts import Abort, collect


__all__ = [
    "Abort",
    "AnswerRecord",
    "GenerationResult",
    "ToolError",
    "WebComponent",
    "__version__",
    "collect",
    "create_project",
    "sanitize_identifier",
]
