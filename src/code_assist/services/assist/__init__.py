"""Assist service: route table and the generic cache-aside handler."""

from code_assist.services.assist.constants import ROUTES, RouteDescriptor
from code_assist.services.assist.service import AssistService


__all__ = [
    "ROUTES",
    "AssistService",
    "RouteDescriptor",
]
