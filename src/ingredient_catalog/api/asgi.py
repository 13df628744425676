"""ASGI entrypoint for the ingredient catalog API.

Serve with ``uvicorn ingredient_catalog.api.asgi:app`` or the
``ingredient-catalog`` console script.
"""

import uvicorn

from ingredient_catalog.api.app import create_app
from ingredient_catalog.containers import build_container

container = build_container()
app = create_app(container)


def main() -> None:
    """Run the API with uvicorn using the configured bind address."""
    settings = container.settings
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
