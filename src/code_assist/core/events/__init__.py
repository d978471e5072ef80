"""Application lifecycle events."""

from code_assist.core.events.lifespan import lifespan


__all__ = ["lifespan"]
