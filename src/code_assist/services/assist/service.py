"""Assist service: generic request handling for every assist route.

Provides:
- Input validation against the route's input field
- Cache-aside lookup and population
- Generation calls with route-specific or default model parameters
- Translation of generation failures into a generic server error
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from code_assist.cache.keys import derive_key
from code_assist.core.exceptions import BadRequestException, UpstreamServiceException
from code_assist.llm.exceptions import LLMError
from code_assist.llm.prompts import resolve_prompt
from code_assist.observability.logging import get_logger
from code_assist.observability.metrics import (
    record_cache_lookup,
    record_generation_failure,
)
from code_assist.observability.tracing import add_span_attributes


if TYPE_CHECKING:
    from code_assist.cache.backend import CacheBackend
    from code_assist.core.config import Settings
    from code_assist.llm.client.protocol import LLMClientProtocol
    from code_assist.services.assist.constants import RouteDescriptor

logger = get_logger(__name__)


class AssistService:
    """Serves assist routes from cache or the generation service.

    Orchestrates, per request:
    1. Validation of the route's input field
    2. Redis lookup under ``"<route>:<sha256(input)>"``
    3. On a miss, a generation call with the route's system prompt
    4. Cache population (failures ignored) and response shaping

    The service holds no per-request state; one instance serves all requests.
    """

    def __init__(
        self,
        llm_client: LLMClientProtocol,
        cache: CacheBackend,
        settings: Settings,
    ) -> None:
        self._llm_client = llm_client
        self._cache = cache
        self._settings = settings

    def _extract_input(self, route: RouteDescriptor, body: Any) -> str:
        value = body.get(route.input_field) if isinstance(body, dict) else None
        if not isinstance(value, str) or not value.strip():
            raise BadRequestException(route.missing_field_message)
        return value

    async def _generate(self, route: RouteDescriptor, user_input: str) -> str:
        llm = self._settings.llm
        system_prompt = resolve_prompt(
            route.route_id,
            word_budget=self._settings.explain_word_budget,
        )
        stop = list(route.stop) if route.stop is not None else list(llm.stop)

        try:
            result = await self._llm_client.generate(
                user_input,
                system=system_prompt,
                model=route.model or llm.model,
                max_tokens=route.max_tokens or llm.max_tokens,
                stop=stop,
            )
        except LLMError as e:
            record_generation_failure(route.route_id.value)
            logger.opt(exception=e).error(
                "Generation service call failed",
                route=route.route_id.value,
                input_chars=len(user_input),
            )
            raise UpstreamServiceException(route.error_message) from e

        logger.info(
            "Generated response",
            route=route.route_id.value,
            model=result.model,
            input_chars=len(user_input),
            output_chars=len(result.text),
            completion_tokens=result.completion_tokens,
        )
        return result.text

    async def handle(self, route: RouteDescriptor, body: Any) -> dict[str, str]:
        """Serve one assist request.

        Args:
            route: Descriptor of the route being served.
            body: Decoded JSON request body (any JSON value).

        Returns:
            ``{route.output_field: <text>}``.

        Raises:
            BadRequestException: If the input field is missing, not a
                string, or blank.
            UpstreamServiceException: If the generation service fails.
        """
        user_input = self._extract_input(route, body)
        key = derive_key(route.route_id.value, user_input)

        cached = await self._cache.get(key)
        hit = cached is not None
        record_cache_lookup(route.route_id.value, hit=hit)
        add_span_attributes(assist_route=route.route_id.value, cache_hit=hit)

        if cached is not None:
            logger.debug("Cache hit", route=route.route_id.value, key=key)
            return {route.output_field: cached}

        logger.debug("Cache miss", route=route.route_id.value, key=key)
        text = await self._generate(route, user_input)

        await self._cache.set(key, text, self._settings.cache.ttl)

        return {route.output_field: text}
