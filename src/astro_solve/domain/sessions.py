"""Domain models for the plate-solve session."""

from dataclasses import dataclass
from enum import Enum

from astro_solve.domain.plate_solve import PlateSolveResult
from astro_solve.errors import ErrorKind


class SessionState(str, Enum):
    """Observable states of a plate-solve session."""

    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    ANALYZING = "analyzing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Pending:
    """An analysis request is in flight."""


@dataclass(frozen=True)
class Succeeded:
    """The analysis produced a validated result."""

    result: PlateSolveResult


@dataclass(frozen=True)
class Failed:
    """The analysis failed with a user-facing message."""

    error_kind: ErrorKind
    message: str


AnalysisOutcome = Pending | Succeeded | Failed


@dataclass(frozen=True)
class SessionNotice:
    """A transient message about a rejected user action."""

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for rendering."""

    state: SessionState
    image_name: str | None = None
    media_type: str | None = None
    preview_id: str | None = None
    result: PlateSolveResult | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None
    notice: SessionNotice | None = None
