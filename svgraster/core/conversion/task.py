"""Conversion of one SVG file into one raster file."""

import asyncio
from pathlib import Path
from typing import Union

from svgraster.core.constants import DEFAULT_PROBE_HEIGHT, LOAD_STATUS_SUCCESS
from svgraster.core.dimensions import (
    Dimensions,
    dimensions_from_geometry,
    normalize_dimensions,
    viewport_size,
)
from svgraster.core.exceptions import PageLoadError
from svgraster.core.renderer.base import RendererEngine, RendererPage
from svgraster.core.renderer.scripts import APPLY_DIMENSIONS, READ_GEOMETRY
from svgraster.utils.logging import get_logger

from .content import load_content_uri

logger = get_logger(__name__)


async def run_conversion(
    engine: RendererEngine,
    source_path: Union[str, Path],
    destination_path: Union[str, Path],
    probe_height: float = DEFAULT_PROBE_HEIGHT,
) -> str:
    """Render ``source_path`` into ``destination_path``.

    The page is created while the source is being read. Whatever happens
    after the page exists, it is closed before this coroutine returns. A
    failure to close it is logged and never replaces the task result.

    Args:
        engine: Running renderer engine
        source_path: SVG file to convert
        destination_path: Raster file to write
        probe_height: Height applied first to discover the native geometry

    Returns:
        The destination path

    Raises:
        EngineError: If no page could be created
        ContentReadError: If the source cannot be read
        PageLoadError: If the renderer did not load the content
    """
    page_task = asyncio.ensure_future(engine.new_page())
    content_task = asyncio.ensure_future(load_content_uri(source_path))
    try:
        await asyncio.wait([page_task, content_task])
    except asyncio.CancelledError:
        content_task.cancel()
        await _close_pending_page(page_task, source_path)
        raise

    page_error = page_task.exception()
    content_error = content_task.exception()
    if page_error is not None:
        raise page_error
    page = page_task.result()

    try:
        if content_error is not None:
            raise content_error
        content = content_task.result()

        status = await page.load(content)
        if status != LOAD_STATUS_SUCCESS:
            raise PageLoadError(str(source_path), status)

        await page.evaluate(
            APPLY_DIMENSIONS, normalize_dimensions(Dimensions(height=probe_height))
        )
        geometry = await page.evaluate(READ_GEOMETRY)
        dimensions = dimensions_from_geometry(geometry)

        attributes = normalize_dimensions(dimensions)
        if attributes is not None:
            await page.evaluate(APPLY_DIMENSIONS, attributes)
        size = viewport_size(dimensions)
        if size is not None:
            await page.set_viewport(size)

        await page.render(str(destination_path))
    finally:
        await _close_page(page, source_path)

    logger.debug(
        "conversion_completed",
        destination=str(destination_path),
        width=size["width"] if size else None,
        height=size["height"] if size else None,
    )
    return str(destination_path)


async def _close_page(page: RendererPage, source_path: Union[str, Path]) -> None:
    try:
        await page.close()
    except Exception as e:
        logger.warning("page_close_failed", source=str(source_path), error=e)


async def _close_pending_page(
    page_task: "asyncio.Future[RendererPage]", source_path: Union[str, Path]
) -> None:
    """Close the page of an interrupted task once its creation settles."""
    try:
        page = await page_task
    except Exception as e:
        logger.debug("page_creation_abandoned", source=str(source_path), error=e)
        return
    await _close_page(page, source_path)
