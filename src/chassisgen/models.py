"""
chassisgen.models - Pydantic Models for Collected Answers
=========================================================

This module defines the data models shared by the prompt sequence and the
project generator. Pydantic gives us validation of whatever the user typed
and a frozen record that the generator can read without worrying about
later mutation.

Architecture Notes
------------------
    AnswerRecord (main)
    ├── name, root, scope: str / Path
    ├── overwrite, mkdir: bool | None  (only set when the question was asked)
    ├── ngnx, data: bool flags
    └── wc: tuple[WebComponent, ...]

    ManifestAuthor
    ├── name: str
    └── email: str | None

Usage Example
-------------
>>> from chassisgen.models import AnswerRecord
>>> answers = AnswerRecord(name="My App!", root="/tmp/myapp", data=True)
>>> answers.package_name
'MyApp'
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Characters allowed in package names and CSS scopes
IDENTIFIER_PATTERN = re.compile(r"[^A-Za-z0-9_-]")

# CDN location of the individual Chassis web components
COMPONENT_CDN_URL = "https://cdn.author.io/chassis/components/latest/{token}.min.js"


def sanitize_identifier(raw: str) -> str:
    """
    Reduce a raw string to the characters ``[A-Za-z0-9_-]``.

    Examples
    --------
    >>> sanitize_identifier("My App!")
    'MyApp'
    """
    return IDENTIFIER_PATTERN.sub("", raw)


def resolve_root(value: str | Path) -> Path:
    """Turn a user-supplied project root into an absolute path."""
    return Path(value).expanduser().resolve()


# =============================================================================
# Enumerations
# =============================================================================

class WebComponent(str, Enum):
    """
    Chassis web components that can be loaded into the generated app.

    The catalog is closed: the value is the token used to build the CDN
    URL and ``label`` is what the checkbox prompt shows.
    """

    CYCLE = "chassis-cycle"
    LAYOUT = "chassis-layout"
    LIST = "chassis-list"
    OVERLAY = "chassis-overlay"

    @property
    def label(self) -> str:
        """Human-readable name for the checkbox prompt."""
        labels = {
            WebComponent.CYCLE: "Cycle",
            WebComponent.LAYOUT: "Layout",
            WebComponent.LIST: "Advanced List Control",
            WebComponent.OVERLAY: "Overlays (modals)",
        }
        return labels[self]

    @property
    def script_url(self) -> str:
        return COMPONENT_CDN_URL.format(token=self.value)


# =============================================================================
# Manifest Author
# =============================================================================

class ManifestAuthor(BaseModel):
    """
    Author entry written into the generated package.json.

    Built from the global git identity. The name falls back to
    ``"Unknown"`` and the email is kept only when it looks like an address.
    """

    name: str = "Unknown"
    email: str | None = None

    @classmethod
    def from_git_identity(cls, name: str, email: str) -> ManifestAuthor:
        """
        Build an author from raw ``git config`` values.

        Parameters
        ----------
        name : str
            Value of ``user.name`` (may be empty).
        email : str
            Value of ``user.email`` (may be empty).
        """
        name = name.strip()
        email = email.strip()
        return cls(
            name=name or "Unknown",
            email=email if email and "@" in email else None,
        )

    def to_manifest(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


# =============================================================================
# Answer Record
# =============================================================================

class AnswerRecord(BaseModel):
    """
    Finalized answers of one interactive run.

    Keys that belong to questions which were never shown stay ``None``.
    The record is frozen once built; the generator only reads it.

    Attributes
    ----------
    name : str
        Project name with surrounding whitespace trimmed, used as typed in
        headings and descriptions.

    root : Path
        Absolute directory the boilerplate is cloned into.

    overwrite : bool | None
        Whether an existing ``root`` may be deleted. Only asked when
        ``root`` already exists.

    mkdir : bool | None
        Whether missing parents of ``root`` may be created. Only asked when
        the parent directory is not accessible.

    scope : str
        CSS scope. Always sanitized.

    ngnx : bool
        Load the NGN extension library.

    data : bool | None
        Load the full NGN build with data models/stores. Never set when
        ``ngnx`` is true.

    wc : tuple[WebComponent, ...]
        Selected web components, in selection order.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Project name")
    root: Path = Field(description="Project root directory")
    overwrite: bool | None = None
    mkdir: bool | None = None
    scope: str = Field(default="", description="CSS scope")
    ngnx: bool = False
    data: bool | None = None
    wc: tuple[WebComponent, ...] = ()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Project name cannot be empty"
            raise ValueError(msg)
        if not sanitize_identifier(v):
            msg = f"Project name '{v}' has no letters, digits, '-' or '_'"
            raise ValueError(msg)
        return v

    @field_validator("root", mode="before")
    @classmethod
    def validate_root(cls, v: str | Path) -> Path:
        return resolve_root(v)

    @field_validator("scope")
    @classmethod
    def validate_scope(cls, v: str) -> str:
        return sanitize_identifier(v)

    @model_validator(mode="before")
    @classmethod
    def default_scope(cls, data: Any) -> Any:
        """
        Scope falls back to the project name when it is blank or has no
        identifier characters left after sanitizing.
        """
        if isinstance(data, dict) and not sanitize_identifier(str(data.get("scope") or "")):
            data = {**data, "scope": str(data.get("name", ""))}
        return data

    @model_validator(mode="after")
    def check_feature_flags(self) -> AnswerRecord:
        if self.ngnx and self.data is not None:
            msg = "The data layer option is not available with the extension library"
            raise ValueError(msg)
        return self

    @property
    def package_name(self) -> str:
        """Sanitized project name used for package.json and CSS selectors."""
        return sanitize_identifier(self.name)

    @property
    def uses_data_layer(self) -> bool:
        return bool(self.data)
