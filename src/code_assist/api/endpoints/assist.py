"""Assist endpoints.

One POST endpoint per route in the route table. Every endpoint delegates
to the same AssistService handler; routes differ only in configuration.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse

from code_assist.api.dependencies import get_assist_service
from code_assist.core.exceptions import ErrorResponse
from code_assist.services.assist.constants import ROUTES, RouteDescriptor
from code_assist.services.assist.service import AssistService


router = APIRouter(tags=["assist"])


async def _read_json(request: Request) -> Any:
    """Decode the request body, or None if it is not valid JSON.

    Invalid bodies are reported by the service as a missing input field.
    """
    try:
        return await request.json()
    except ValueError:
        return None


def _openapi_body(route: RouteDescriptor) -> dict[str, Any]:
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "required": [route.input_field],
                        "properties": {route.input_field: {"type": "string"}},
                    }
                }
            },
        }
    }


def _build_endpoint(route: RouteDescriptor) -> Any:
    async def endpoint(
        request: Request,
        service: Annotated[AssistService, Depends(get_assist_service)],
    ) -> ORJSONResponse:
        body = await _read_json(request)
        return ORJSONResponse(content=await service.handle(route, body))

    endpoint.__name__ = f"assist_{route.route_id.value}"
    return endpoint


def _register_routes() -> None:
    for route in ROUTES.values():
        router.add_api_route(
            route.path,
            _build_endpoint(route),
            methods=["POST"],
            summary=f"{route.route_id.value.capitalize()} request",
            description=(
                f"Reads `{route.input_field}` from the JSON body and returns "
                f"`{route.output_field}`. Responses are cached per input."
            ),
            response_class=ORJSONResponse,
            responses={
                400: {"model": ErrorResponse, "description": route.missing_field_message},
                500: {"model": ErrorResponse, "description": route.error_message},
            },
            openapi_extra=_openapi_body(route),
        )


_register_routes()
