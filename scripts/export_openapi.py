"""Write the OpenAPI schema of the service to docs/openapi.json."""

import json
from pathlib import Path

from fastapi.openapi.utils import get_openapi

from code_assist.core.config import Settings
from code_assist.factory import create_app


def main() -> None:
    """Build the app in test mode and dump its OpenAPI schema."""
    app = create_app(Settings(APP_ENV="test"))
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    output = Path("docs/openapi.json")
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        json.dump(openapi_schema, f, indent=2)


if __name__ == "__main__":
    main()
