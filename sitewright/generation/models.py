# sitewright/generation/models.py
"""
Data models for the materialization pipeline.

This module defines the types shared by the parser, writer, scaffolder,
builder and facade, kept separate to avoid circular imports between them.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from sitewright.generation.errors import UnsupportedKindError, ValidationError

AppId = Union[int, str]


class OutputKind(str, Enum):
    """The closed set of generated output kinds.

    The value doubles as the output directory prefix.
    """
    SINGLE_FILE = "html"
    MULTI_FILE = "multi_file"
    FRAMEWORK_PROJECT = "vue_project"

    @classmethod
    def parse(cls, value) -> "OutputKind":
        """Coerce `value` to an OutputKind or raise UnsupportedKindError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for kind in cls:
                if normalized in (kind.value, kind.name.lower()):
                    return kind
        raise UnsupportedKindError(value)

    @property
    def is_parsed(self) -> bool:
        """Whether files for this kind are extracted from model text."""
        return self is not OutputKind.FRAMEWORK_PROJECT

    @property
    def description(self) -> str:
        return _KIND_DESCRIPTIONS[self]


_KIND_DESCRIPTIONS = {
    OutputKind.SINGLE_FILE: "Single HTML document",
    OutputKind.MULTI_FILE: "HTML + CSS + JS",
    OutputKind.FRAMEWORK_PROJECT: "Vue single-page project",
}

# Named slots per parsed kind, in write order
KIND_SLOTS = {
    OutputKind.SINGLE_FILE: ("html",),
    OutputKind.MULTI_FILE: ("html", "css", "js"),
    OutputKind.FRAMEWORK_PROJECT: (),
}


class ParsedFileSet(BaseModel):
    """In-memory result of parsing one model response."""
    kind: OutputKind = Field(..., description="Kind the text was parsed as")
    html: str = Field("", description="HTML document (primary slot)")
    css: str = Field("", description="Stylesheet")
    js: str = Field("", description="Script")
    content: Optional[str] = Field(None, description="Accompanying text for framework projects")

    def slots(self) -> Iterator[Tuple[str, str]]:
        """Yield (slot, value) for every slot of this kind, empty ones included."""
        for slot in KIND_SLOTS[self.kind]:
            yield slot, getattr(self, slot)

    @property
    def primary(self) -> str:
        return self.html

    def require_primary(self) -> None:
        """Raise ValidationError if a parsed kind has no primary content."""
        if self.kind.is_parsed and not self.html.strip():
            raise ValidationError("primary content empty")


class OutputDirectory:
    """Handle to a generated project directory, `root/{kind}_{appId}`.

    The handle owns no file contents; collaborators only need the absolute
    path and an existence check.
    """

    def __init__(self, path: Union[str, Path], kind: OutputKind, app_id: AppId):
        self._path = Path(path).resolve()
        self.kind = kind
        self.app_id = app_id

    @property
    def path(self) -> Path:
        return self._path

    def absolute_path(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.is_dir()

    def __eq__(self, other) -> bool:
        if not isinstance(other, OutputDirectory):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"OutputDirectory({self.absolute_path()!r})"


class BuildState(str, Enum):
    """States of the framework project build."""
    NOT_ATTEMPTED = "not_attempted"
    INSTALLING = "installing"
    BUILDING = "building"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class BuildStep(BaseModel):
    """One subprocess invocation made by the builder."""
    name: str = Field(..., description="install or build")
    command: List[str] = Field(default_factory=list)
    returncode: Optional[int] = Field(None, description="Exit code, None if the process never finished")
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    def render(self) -> str:
        """Text block for the build log."""
        lines = [f"$ {' '.join(self.command)}"]
        if self.stdout:
            lines.append(self.stdout.rstrip())
        if self.stderr:
            lines.append(self.stderr.rstrip())
        if self.timed_out:
            lines.append(f"[{self.name}] timed out after {self.duration:.1f}s")
        else:
            lines.append(f"[{self.name}] exit code {self.returncode}")
        return "\n".join(lines)


class BuildOutcome(BaseModel):
    """Result of the optional build step. Never raised, always returned."""
    attempted: bool = False
    succeeded: bool = False
    log: str = ""
    state: BuildState = BuildState.NOT_ATTEMPTED
    steps: List[BuildStep] = Field(default_factory=list)
    artifact_dir: Optional[str] = None

    @classmethod
    def skipped(cls, reason: str) -> "BuildOutcome":
        return cls(attempted=False, succeeded=False, log=reason, state=BuildState.NOT_ATTEMPTED)


@dataclass
class GenerationResult:
    """What the synchronous facade path hands back to the caller."""
    directory: OutputDirectory
    kind: OutputKind
    written_files: List[str] = field(default_factory=list)
    build: Optional[BuildOutcome] = None

    def absolute_path(self) -> str:
        return self.directory.absolute_path()
