"""
Bitmap to multi-page PDF.

A captured page is one tall bitmap. It is scaled to the A4 width and cut
into bands of one page height each; every band becomes one PDF page.
"""

from io import BytesIO
from typing import List, Optional, Tuple

from PIL import Image, UnidentifiedImageError
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .config import get_logger
from .exceptions import ConversionError

logger = get_logger("raster")

IMAGE_WIDTH_MM = 210
SLICE_HEIGHT_MM = 295


def scaled_height(
    px_width: int, px_height: int, width_mm: float = IMAGE_WIDTH_MM
) -> float:
    """Height in mm of a bitmap drawn at ``width_mm`` wide."""
    if px_width <= 0:
        raise ValueError("Image width must be positive")
    return px_height * width_mm / px_width


def page_offsets(
    image_height_mm: float, page_height_mm: float = SLICE_HEIGHT_MM
) -> List[float]:
    """Vertical offsets of the whole image on each page.

    Page ``n`` shows the image shifted up by ``n * page_height_mm``; an image
    that fits on one page yields ``[0.0]``.

    A page is added only while some of the image is still below the last
    page (``height_left > 0``). An image exactly ``k`` pages tall therefore
    gets ``k`` pages; a ``height_left >= 0`` loop would append a blank one.
    """
    offsets = [0.0]
    height_left = image_height_mm - page_height_mm
    while height_left > 0:
        offsets.append(height_left - image_height_mm)
        height_left -= page_height_mm
    return offsets


def slice_bands(
    image: Image.Image,
    width_mm: float = IMAGE_WIDTH_MM,
    page_height_mm: float = SLICE_HEIGHT_MM,
) -> List[Image.Image]:
    """Crop the bitmap into page-sized bands, top to bottom."""
    band_px = page_height_mm * image.width / width_mm
    total_mm = scaled_height(image.width, image.height, width_mm)

    bands = []
    for index in range(len(page_offsets(total_mm, page_height_mm))):
        top = round(index * band_px)
        bottom = min(round((index + 1) * band_px), image.height)
        if top >= bottom:
            break
        bands.append(image.crop((0, top, image.width, bottom)))
    return bands


def load_image(data: bytes) -> Image.Image:
    if not data:
        raise ConversionError("Captured image is empty")
    try:
        image = Image.open(BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ConversionError(f"Could not decode captured image: {e}")
    return image.convert("RGB")


def images_to_pdf(data: bytes, title: Optional[str] = None) -> Tuple[bytes, int]:
    """Render PNG/JPEG bytes into an A4 PDF.

    Returns:
        Tuple of (pdf bytes, page count)
    """
    image = load_image(data)
    bands = slice_bands(image)
    logger.debug(
        "Slicing %dx%d bitmap into %d page(s)", image.width, image.height, len(bands)
    )

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    if title:
        pdf.setTitle(title)

    page_height = A4[1]
    for band in bands:
        band_height = scaled_height(image.width, band.height) * mm
        pdf.drawImage(
            ImageReader(band),
            0,
            page_height - band_height,
            width=IMAGE_WIDTH_MM * mm,
            height=band_height,
        )
        pdf.showPage()

    pdf.save()
    return buffer.getvalue(), len(bands)
