"""Application lifecycle events."""

from recyclehub.core.events.lifespan import lifespan


__all__ = ["lifespan"]
