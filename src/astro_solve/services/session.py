"""Session state machine for image selection and plate solving."""

import logging
from dataclasses import dataclass, field

from astro_solve.domain.images import ImageFile
from astro_solve.domain.plate_solve import ImagePayload
from astro_solve.domain.sessions import (
    AnalysisOutcome,
    Failed,
    Pending,
    SessionNotice,
    SessionSnapshot,
    SessionState,
    Succeeded,
)
from astro_solve.errors import AstroSolveError, ErrorKind, PreconditionError
from astro_solve.services.analysis import PlateSolveService
from astro_solve.services.encoding import PreviewStore, encode_image

_logger = logging.getLogger(__name__)

ANALYSIS_IN_PROGRESS = "An analysis is already in progress."
UNKNOWN_FAILURE = "An unknown error occurred during analysis."


@dataclass
class _Selection:
    image: ImageFile
    payload: ImagePayload
    preview_id: str


@dataclass
class AstroSession:
    """Owns the selected image and the current analysis outcome.

    Only one analysis runs at a time, even across image changes. Every
    selection, removal and solve bumps ``generation``; an analysis whose
    generation is no longer current when it completes is discarded.
    """

    plate_solve_service: PlateSolveService
    preview_store: PreviewStore
    generation: int = 0
    _in_flight: bool = field(default=False, repr=False)
    _selection: _Selection | None = field(default=None, repr=False)
    _outcome: AnalysisOutcome | None = field(default=None, repr=False)
    _notice: SessionNotice | None = field(default=None, repr=False)

    @property
    def state(self) -> SessionState:
        """Return the state derived from the selection and outcome."""
        if self._selection is None:
            return SessionState.IDLE
        if isinstance(self._outcome, Pending):
            return SessionState.ANALYZING
        if isinstance(self._outcome, Succeeded):
            return SessionState.SUCCEEDED
        if isinstance(self._outcome, Failed):
            return SessionState.FAILED
        return SessionState.IMAGE_SELECTED

    @property
    def outcome(self) -> AnalysisOutcome | None:
        """Return the current analysis outcome, if any."""
        return self._outcome

    def select_image(self, image: ImageFile | None) -> SessionSnapshot:
        """Replace the selected image, clearing any prior outcome."""
        self._clear()
        if image is None:
            return self.snapshot()
        try:
            payload = encode_image(image)
            preview_id = self.preview_store.acquire(image)
        except AstroSolveError as exc:
            _logger.warning("Image rejected: name=%s error=%s", image.name, exc)
            self._notice = SessionNotice(kind=exc.kind, message=exc.message)
            return self.snapshot()
        self._selection = _Selection(
            image=image, payload=payload, preview_id=preview_id
        )
        _logger.info(
            "Image selected: name=%s type=%s", image.name, image.media_type
        )
        return self.snapshot()

    def remove_image(self) -> SessionSnapshot:
        """Drop the selected image and its outcome."""
        self._clear()
        return self.snapshot()

    async def solve(self) -> SessionSnapshot:
        """Plate-solve the selected image and record the outcome."""
        self._notice = None
        selection = self._selection
        if selection is None:
            return self._reject(PreconditionError())
        if self._in_flight:
            return self._reject(PreconditionError(ANALYSIS_IN_PROGRESS))

        self.generation += 1
        attempt = self.generation
        self._outcome = Pending()
        self._in_flight = True
        outcome: AnalysisOutcome
        try:
            result = await self.plate_solve_service.analyze(selection.payload)
        except AstroSolveError as exc:
            outcome = Failed(error_kind=exc.kind, message=exc.message)
        except Exception:
            _logger.exception("Unexpected analysis failure")
            outcome = Failed(
                error_kind=ErrorKind.SERVICE_ERROR, message=UNKNOWN_FAILURE
            )
        else:
            outcome = Succeeded(result=result)
        finally:
            self._in_flight = False

        if attempt != self.generation:
            _logger.info(
                "Discarding stale analysis: attempt=%s current=%s",
                attempt,
                self.generation,
            )
            return self.snapshot()
        self._outcome = outcome
        self._notice = None
        return self.snapshot()

    def snapshot(self) -> SessionSnapshot:
        """Return a read-only view of the session."""
        selection = self._selection
        outcome = self._outcome
        return SessionSnapshot(
            state=self.state,
            image_name=selection.image.name if selection else None,
            media_type=selection.payload.media_type if selection else None,
            preview_id=selection.preview_id if selection else None,
            result=outcome.result if isinstance(outcome, Succeeded) else None,
            error_kind=outcome.error_kind if isinstance(outcome, Failed) else None,
            error=outcome.message if isinstance(outcome, Failed) else None,
            notice=self._notice,
        )

    def _clear(self) -> None:
        self.generation += 1
        if self._selection is not None:
            self.preview_store.release(self._selection.preview_id)
        self._selection = None
        self._outcome = None
        self._notice = None

    def _reject(self, error: AstroSolveError) -> SessionSnapshot:
        _logger.info("Solve rejected: state=%s", self.state.value)
        self._notice = SessionNotice(kind=error.kind, message=error.message)
        return self.snapshot()
