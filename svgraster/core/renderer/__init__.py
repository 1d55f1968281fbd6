"""Renderer capability used by the conversion tasks."""

from .base import PageScript, RendererEngine, RendererPage

__all__ = ["PageScript", "RendererEngine", "RendererPage"]
