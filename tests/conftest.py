"""Pytest fixtures for svgraster tests."""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from svgraster.config import Settings
from svgraster.core.constants import LOAD_STATUS_SUCCESS
from svgraster.core.exceptions import EngineError
from svgraster.core.renderer.base import PageScript, RendererEngine, RendererPage

WIDE_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100">'
    b'<rect width="200" height="100" fill="red"/></svg>'
)
SIZED_SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="100" height="40">'
    b'<circle cx="20" cy="20" r="20"/></svg>'
)


class FakePage(RendererPage):
    """In-memory page emulating an SVG root element.

    The root element is modelled as an attribute dict plus a viewBox taken
    from the loaded content's markup.
    """

    def __init__(self, engine: "FakeEngine", index: int):
        self.engine = engine
        self.index = index
        self.attributes: Dict[str, Optional[str]] = {}
        self.view_box: Optional[Dict[str, float]] = None
        self.loaded_content: Optional[str] = None
        self.viewport: Optional[Dict[str, int]] = None
        self.rendered_to: Optional[str] = None
        self.evaluated: List[str] = []
        self.closed = False

    async def load(self, content: str) -> str:
        await asyncio.sleep(0)
        self.loaded_content = content
        status = self.engine.load_status
        if status == LOAD_STATUS_SUCCESS:
            self.attributes = dict(self.engine.declared)
            self.view_box = self.engine.view_box
        return status

    async def evaluate(self, script: PageScript, arg: Any = None) -> Any:
        await asyncio.sleep(0)
        self.evaluated.append(script.name)
        if script.name == "apply_dimensions":
            for name in ("width", "height"):
                if arg.get(name):
                    self.attributes[name] = arg[name]
                else:
                    self.attributes.pop(name, None)
            return dict(self.attributes)
        if script.name == "read_geometry":
            return {
                "width": self.attributes.get("width"),
                "height": self.attributes.get("height"),
                "viewBoxWidth": self.view_box["width"] if self.view_box else None,
                "viewBoxHeight": self.view_box["height"] if self.view_box else None,
            }
        raise AssertionError(f"unexpected script {script.name}")

    async def set_viewport(self, size: Dict[str, int]) -> None:
        await asyncio.sleep(0)
        self.viewport = dict(size)

    async def render(self, destination_path: str) -> None:
        await asyncio.sleep(self.engine.delay_for(self.index))
        if self.engine.render_error is not None:
            raise self.engine.render_error
        Path(destination_path).write_bytes(b"\x89PNG fake")
        self.rendered_to = destination_path

    async def close(self) -> None:
        self.closed = True
        self.engine.open_pages -= 1
        if self.engine.close_error is not None:
            raise self.engine.close_error


class FakeEngine(RendererEngine):
    """Engine recording page lifecycle for assertions."""

    def __init__(
        self,
        load_status: str = LOAD_STATUS_SUCCESS,
        declared: Optional[Dict[str, str]] = None,
        view_box: Optional[Dict[str, float]] = None,
        render_error: Optional[BaseException] = None,
        render_delay: float = 0,
        page_error: Optional[BaseException] = None,
        close_error: Optional[BaseException] = None,
        exit_error: Optional[BaseException] = None,
        render_delays: Optional[List[float]] = None,
        page_delay: float = 0,
    ):
        self.load_status = load_status
        self.declared = declared or {}
        self.view_box = (
            view_box if view_box is not None else {"width": 200, "height": 100}
        )
        self.render_error = render_error
        self.render_delay = render_delay
        self.page_error = page_error
        self.close_error = close_error
        self.exit_error = exit_error
        self.render_delays = render_delays
        self.page_delay = page_delay

        self.pages: List[FakePage] = []
        self.open_pages = 0
        self.max_open_pages = 0
        self.exit_calls = 0
        self.open_pages_at_exit: Optional[int] = None

    def delay_for(self, index: int) -> float:
        if self.render_delays and index < len(self.render_delays):
            return self.render_delays[index]
        return self.render_delay

    @property
    def pages_created(self) -> int:
        return len(self.pages)

    async def new_page(self) -> FakePage:
        await asyncio.sleep(self.page_delay)
        if self.page_error is not None:
            raise self.page_error
        page = FakePage(self, len(self.pages))
        self.pages.append(page)
        self.open_pages += 1
        self.max_open_pages = max(self.max_open_pages, self.open_pages)
        return page

    async def exit(self) -> None:
        self.exit_calls += 1
        self.open_pages_at_exit = self.open_pages
        if self.exit_error is not None:
            raise self.exit_error


@pytest.fixture
def make_engine():
    """Build a FakeEngine with custom behaviour."""
    return FakeEngine


@pytest.fixture
def fake_engine():
    """A fake engine rendering a 2:1 viewBox with no declared size."""
    return FakeEngine()


@pytest.fixture
def engine_factory(fake_engine):
    """Engine factory handing out ``fake_engine``."""

    async def factory():
        return fake_engine

    return factory


@pytest.fixture
def failing_engine_factory():
    """Engine factory failing the way a missing browser does."""

    async def factory():
        raise EngineError("Failed to launch chromium: executable doesn't exist")

    return factory


@pytest.fixture
def settings():
    """Settings with a small pool so limits are observable."""
    return Settings(concurrency_limit=2, probe_height=64)


@pytest.fixture
def svg_dir(tmp_path):
    """Directory with four SVG files and one unrelated file."""
    source = tmp_path / "svg"
    source.mkdir()
    for name in ("a.svg", "b.svg", "c.SVG", "d.svg"):
        (source / name).write_bytes(WIDE_SVG)
    (source / "notes.txt").write_text("not an image")
    return source


@pytest.fixture
def wide_svg(tmp_path):
    """SVG with a 2:1 viewBox and no declared size."""
    path = tmp_path / "wide.svg"
    path.write_bytes(WIDE_SVG)
    return path


@pytest.fixture
def sized_svg(tmp_path):
    """SVG with declared width/height and no viewBox."""
    path = tmp_path / "sized.svg"
    path.write_bytes(SIZED_SVG)
    return path
