"""
Export pipeline: rasterize the rendered preview and embed it as a single image
on one fixed-size PDF page.

The preview is reached through a ``PreviewSurface`` so the pipeline itself does
not care whether the DOM lives in headless Chromium or in a test double.
"""
from __future__ import annotations

import logging
from io import BytesIO
from typing import Iterable, NamedTuple, Protocol, Tuple

from PIL import Image
from playwright.async_api import async_playwright
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.core.config import settings
from app.core.errors import ExportFailure
from app.services.preview_service import DECORATION_CLASSES
from app.services.style_service import PREVIEW_SELECTOR

logger = logging.getLogger(__name__)

EDITABLE_SELECTOR = "[contenteditable]"


class Placement(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class PreviewSurface(Protocol):
    async def remove_classes(self, selector: str, classes: Iterable[str]) -> None:
        ...

    async def add_classes(self, selector: str, classes: Iterable[str]) -> None:
        ...

    async def capture(self, scale: int) -> bytes:
        """Rasterize the preview element and return PNG bytes."""
        ...


def fit_to_page(image_size: Tuple[int, int], page_size: Tuple[float, float]) -> Placement:
    """Scale an image to the page width, or to the height when that constrains, and center it."""
    img_w, img_h = image_size
    page_w, page_h = page_size
    if img_w <= 0 or img_h <= 0:
        raise ValueError(f"Invalid image size {image_size}")

    ratio = img_h / img_w
    width, height = page_w, page_w * ratio
    if height > page_h:
        height = page_h
        width = page_h / ratio

    return Placement(x=(page_w - width) / 2, y=(page_h - height) / 2, width=width, height=height)


def assemble_pdf(png_bytes: bytes, page_size: Tuple[float, float] = A4) -> bytes:
    """Embed a bitmap as the only content of a one-page PDF (no text layer)."""
    image = Image.open(BytesIO(png_bytes))
    image.load()
    placement = fit_to_page(image.size, page_size)

    buf = BytesIO()
    pdf = canvas.Canvas(buf, pagesize=page_size)
    pdf.drawImage(ImageReader(image), placement.x, placement.y, width=placement.width, height=placement.height)
    pdf.showPage()
    pdf.save()
    return buf.getvalue()


async def export_preview(surface: PreviewSurface, page_size: Tuple[float, float] = A4, scale: int = 2) -> bytes:
    """Rasterize the preview behind ``surface`` into a one-page PDF.

    Editing decorations are suppressed for the capture and restored afterwards,
    whether the export succeeds or fails.
    """
    if scale < 2:
        raise ValueError("scale must be at least 2 for a legible export")

    await surface.remove_classes(EDITABLE_SELECTOR, DECORATION_CLASSES)
    try:
        png_bytes = await surface.capture(scale)
        pdf_bytes = assemble_pdf(png_bytes, page_size)
        logger.info("Exported preview (%d byte bitmap -> %d byte PDF)", len(png_bytes), len(pdf_bytes))
        return pdf_bytes
    except ExportFailure:
        raise
    except Exception as e:
        logger.exception("Error generating PDF")
        raise ExportFailure("There was an error creating the PDF file.", cause=e)
    finally:
        await surface.add_classes(EDITABLE_SELECTOR, DECORATION_CLASSES)


_TOGGLE_CLASSES_JS = """
([selector, classes, add]) => {
  document.querySelectorAll(selector).forEach(el => {
    classes.forEach(c => add ? el.classList.add(c) : el.classList.remove(c));
  });
}
"""


class PlaywrightPreviewSurface:
    """A preview loaded in a Playwright page; the page's device scale factor fixes the raster scale."""

    def __init__(self, page, selector: str = PREVIEW_SELECTOR):
        self.page = page
        self.selector = selector

    async def remove_classes(self, selector: str, classes: Iterable[str]) -> None:
        await self.page.evaluate(_TOGGLE_CLASSES_JS, [selector, list(classes), False])

    async def add_classes(self, selector: str, classes: Iterable[str]) -> None:
        await self.page.evaluate(_TOGGLE_CLASSES_JS, [selector, list(classes), True])

    async def capture(self, scale: int) -> bytes:
        element = await self.page.query_selector(self.selector)
        if element is None:
            raise ExportFailure(f"Preview element {self.selector!r} not found.")
        return await element.screenshot(type="png", omit_background=False)


async def render_pdf_from_html(html: str, scale: int | None = None) -> bytes:
    """Load preview HTML in headless Chromium and export it."""
    scale = scale or settings.EXPORT_SCALE
    browser = None
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=["--no-sandbox", "--disable-dev-shm-usage"])
            context = await browser.new_context(device_scale_factor=scale, viewport={"width": 900, "height": 1200})
            page = await context.new_page()
            await page.set_content(html, wait_until="load")
            return await export_preview(PlaywrightPreviewSurface(page), scale=scale)
    except ExportFailure:
        raise
    except Exception as e:
        logger.exception("Headless browser export failed")
        raise ExportFailure("There was an error creating the PDF file.", cause=e)
    finally:
        if browser:
            try:
                await browser.close()
            except Exception as e_close:
                logger.debug("Error closing Playwright browser: %s", e_close)
