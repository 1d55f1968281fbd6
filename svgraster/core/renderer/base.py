"""Renderer engine and page interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PageScript:
    """A function evaluated inside the loaded document.

    ``source`` is a JavaScript function expression taking at most one
    argument. Arguments and return values are limited to primitives, lists
    and plain dicts.
    """

    name: str
    source: str


class RendererPage(ABC):
    """One renderable surface, owned by a single conversion task."""

    @abstractmethod
    async def load(self, content: str) -> str:
        """Load a content URI and return the load status ("success" or other)."""

    @abstractmethod
    async def evaluate(self, script: PageScript, arg: Any = None) -> Any:
        """Run ``script`` in the loaded document and return its result."""

    @abstractmethod
    async def set_viewport(self, size: Dict[str, int]) -> None:
        """Resize the rendering surface to ``{"width": w, "height": h}``."""

    @abstractmethod
    async def render(self, destination_path: str) -> None:
        """Rasterize the current surface into ``destination_path``."""

    @abstractmethod
    async def close(self) -> None:
        """Release the page."""


class RendererEngine(ABC):
    """Process-wide renderer handle shared by every task of a batch."""

    @abstractmethod
    async def new_page(self) -> RendererPage:
        """Create a page; safe to call concurrently."""

    @abstractmethod
    async def exit(self) -> None:
        """Shut the engine down."""

