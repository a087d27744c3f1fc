"""ASGI entrypoint for the plate-solve API."""

from astro_solve.api.app import create_app
from astro_solve.containers import build_container

app = create_app(build_container())
