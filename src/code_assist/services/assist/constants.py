"""Route table for the assist service.

Each assist mode is a declarative binding of field names, error message
and optional model overrides. All modes are served by the same handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from code_assist.schemas.enums import RouteId


SUGGEST_MAX_TOKENS: Final[int] = 100
STOP_MARKERS: Final[tuple[str, ...]] = ("<end>",)


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """Configuration of one assist route.

    ``None`` overrides fall back to the global ``llm`` settings.
    """

    route_id: RouteId
    input_field: str
    output_field: str
    error_message: str
    model: str | None = None
    max_tokens: int | None = None
    stop: tuple[str, ...] | None = None

    @property
    def path(self) -> str:
        return f"/{self.route_id.value}"

    @property
    def missing_field_message(self) -> str:
        return f"Missing or empty `{self.input_field}` field."


ROUTES: Final[dict[RouteId, RouteDescriptor]] = {
    RouteId.COMPLETIONS: RouteDescriptor(
        route_id=RouteId.COMPLETIONS,
        input_field="instruction",
        output_field="completion",
        error_message="Failed to fetch completion.",
    ),
    RouteId.EXPLAIN: RouteDescriptor(
        route_id=RouteId.EXPLAIN,
        input_field="code",
        output_field="explanation",
        error_message="Failed to explain code.",
        stop=STOP_MARKERS,
    ),
    RouteId.COMMENT: RouteDescriptor(
        route_id=RouteId.COMMENT,
        input_field="code",
        output_field="commented_code",
        error_message="Failed to comment code.",
    ),
    RouteId.OBFUS: RouteDescriptor(
        route_id=RouteId.OBFUS,
        input_field="code",
        output_field="obfus",
        error_message="Failed to obfus code.",
    ),
    RouteId.SUGGEST: RouteDescriptor(
        route_id=RouteId.SUGGEST,
        input_field="code_context",
        output_field="suggestion",
        error_message="Failed to get suggestion.",
        max_tokens=SUGGEST_MAX_TOKENS,
        stop=STOP_MARKERS,
    ),
}
