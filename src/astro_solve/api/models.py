"""Pydantic response models for the session API."""

from pydantic import BaseModel

from astro_solve.domain.sessions import SessionSnapshot


class PlateSolveView(BaseModel):
    """Plate-solve result as rendered to clients."""

    ra: str
    dec: str
    fov: str
    constellation: str
    objects: list[str]
    summary: str


class NoticeView(BaseModel):
    """Message about a rejected action."""

    kind: str
    message: str


class SessionView(BaseModel):
    """Current session state."""

    state: str
    image_name: str | None = None
    media_type: str | None = None
    preview_url: str | None = None
    result: PlateSolveView | None = None
    error_kind: str | None = None
    error: str | None = None
    notice: NoticeView | None = None

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionView":
        """Build a view from a session snapshot."""
        result = None
        if snapshot.result is not None:
            result = PlateSolveView(
                **snapshot.result.model_dump(mode="json", by_alias=True)
            )
        notice = None
        if snapshot.notice is not None:
            notice = NoticeView(
                kind=snapshot.notice.kind.value, message=snapshot.notice.message
            )
        return cls(
            state=snapshot.state.value,
            image_name=snapshot.image_name,
            media_type=snapshot.media_type,
            preview_url=(
                f"/session/preview/{snapshot.preview_id}"
                if snapshot.preview_id
                else None
            ),
            result=result,
            error_kind=snapshot.error_kind.value if snapshot.error_kind else None,
            error=snapshot.error,
            notice=notice,
        )
