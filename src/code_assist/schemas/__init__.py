"""Shared schemas and enumerations."""

from code_assist.schemas.enums import RouteId


__all__ = ["RouteId"]
