"""System prompt lookup and placeholder substitution."""

from __future__ import annotations

from collections.abc import Mapping

from code_assist.llm.exceptions import LLMConfigurationError
from code_assist.llm.prompts.templates import PROMPT_TEMPLATES, WORD_BUDGET_PLACEHOLDER
from code_assist.schemas.enums import RouteId


def validate_prompt_table(
    templates: Mapping[RouteId, str] = PROMPT_TEMPLATES,
) -> None:
    """Check that every route has a non-empty system prompt.

    Called once at startup so a missing template stops the service
    instead of failing individual requests.

    Raises:
        LLMConfigurationError: If any route has no template.
    """
    missing = [route.value for route in RouteId if not templates.get(route)]
    if missing:
        msg = f"Missing system prompt template for routes: {', '.join(missing)}"
        raise LLMConfigurationError(msg)


def resolve_prompt(
    route_id: RouteId,
    *,
    word_budget: int,
    templates: Mapping[RouteId, str] = PROMPT_TEMPLATES,
) -> str:
    """Return the system prompt for a route, ready to send.

    Args:
        route_id: Route to resolve.
        word_budget: Value substituted for the ``{word_budget}`` placeholder.
        templates: Template table (overridable for tests).

    Returns:
        The system prompt with placeholders replaced.

    Raises:
        LLMConfigurationError: If the route has no template.
    """
    template = templates.get(route_id)
    if not template:
        msg = f"No system prompt template for route '{route_id}'"
        raise LLMConfigurationError(msg)
    return template.replace(WORD_BUDGET_PLACEHOLDER, str(word_budget))
