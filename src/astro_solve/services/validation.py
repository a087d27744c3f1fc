"""Validation of untrusted plate-solve replies."""

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from astro_solve.domain.plate_solve import PlateSolveResult
from astro_solve.errors import SchemaMismatchError


def validate_plate_solve(value: object) -> PlateSolveResult:
    """Return a typed result or raise ``SchemaMismatchError``.

    Values are never coerced. Only the first violation is reported: missing
    fields first, then the string fields, then ``objects``.
    """
    try:
        return PlateSolveResult.model_validate(value)
    except ValidationError as exc:
        raise SchemaMismatchError(detail=_describe(exc.errors())) from exc


def _check_order(error: ErrorDetails) -> tuple[bool, bool]:
    missing = error["type"] == "missing"
    return (not missing, not missing and error["loc"][:1] == ("objects",))


def _describe(errors: list[ErrorDetails]) -> str:
    first = min(errors, key=_check_order)
    location = ".".join(str(part) for part in first["loc"]) or "response"
    return f"{location}: {first['msg']}"
