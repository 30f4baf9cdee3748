import base64
import binascii
import io
import logging
from typing import Callable

from pypdf import PdfReader, PdfWriter, Transformation
from pypdf.errors import PdfReadError
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import getAscentDescent, stringWidth
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

# Signature fields are drawn into a fixed box, in PDF points.
FIELD_WIDTH = 250
FIELD_HEIGHT = 64

SIGNATURE_FONT = "Helvetica"
MAX_FONT_SIZE = 42
MIN_FONT_SIZE = 8


def decode_data_url(data_url: str) -> bytes:
    """
    Decode a ``data:<mime>;base64,<payload>`` string (or a bare base64 payload).

    Raises:
        ValueError: The value is empty or not valid base64.
    """
    if not data_url:
        raise ValueError("Empty signature image")

    payload = data_url
    if data_url.startswith("data:"):
        header, sep, payload = data_url.partition(",")
        if not sep or ";base64" not in header:
            raise ValueError("Signature image is not a base64 data URL")

    try:
        return base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Signature image is not valid base64: {e}") from e


def _read_pdf(pdf_base64: str) -> PdfReader:
    try:
        return PdfReader(io.BytesIO(base64.b64decode(pdf_base64, validate=True)))
    except (binascii.Error, PdfReadError) as e:
        raise ValueError(f"Document is not a readable PDF: {e}") from e


def _stamp_page(
    pdf_base64: str,
    page: int,
    draw: Callable[[canvas.Canvas, float], None],
) -> str:
    """
    Draw on one page of a base64 PDF and return the result as base64.

    ``draw`` receives a canvas the size of the target page and the page height.
    The overlay is merged onto the page so existing content is preserved.
    """
    reader = _read_pdf(pdf_base64)
    if page < 0 or page >= len(reader.pages):
        raise ValueError(f"Page {page} out of range, document has {len(reader.pages)} pages")

    box = reader.pages[page].mediabox
    page_width = float(box.width)
    page_height = float(box.height)

    overlay_buffer = io.BytesIO()
    overlay = canvas.Canvas(overlay_buffer, pagesize=(page_width, page_height))
    draw(overlay, page_height)
    overlay.showPage()
    overlay.save()

    overlay_page = PdfReader(io.BytesIO(overlay_buffer.getvalue())).pages[0]

    writer = PdfWriter(clone_from=reader)
    writer.pages[page].merge_transformed_page(
        overlay_page,
        Transformation().translate(float(box.left), float(box.bottom)),
    )

    output = io.BytesIO()
    writer.write(output)
    return base64.b64encode(output.getvalue()).decode("ascii")


def _fit_font_size(text: str) -> float:
    size = MAX_FONT_SIZE
    while size > MIN_FONT_SIZE and stringWidth(text, SIGNATURE_FONT, size) > FIELD_WIDTH:
        size -= 1
    return size


def insert_text_in_pdf(pdf_base64: str, text: str, position_x: float, position_y: float, page: int = 0) -> str:
    """
    Write a typed signature centred in the signature box.

    Args:
        pdf_base64: Base64 encoded PDF.
        text: Text to draw.
        position_x: Box left edge, points from the page's left side.
        position_y: Box top edge, points from the page's top.
        page: Zero-based page index.

    Returns:
        str: Base64 encoded PDF with the text drawn.

    Raises:
        ValueError: Unreadable PDF or page out of range.
    """
    font_size = _fit_font_size(text)
    text_width = stringWidth(text, SIGNATURE_FONT, font_size)
    ascent, descent = getAscentDescent(SIGNATURE_FONT, font_size)
    text_height = ascent - descent

    def draw(c: canvas.Canvas, page_height: float) -> None:
        x = position_x + (FIELD_WIDTH - text_width) / 2
        y = page_height - position_y - (FIELD_HEIGHT + text_height / 2) / 2
        c.setFont(SIGNATURE_FONT, font_size)
        c.drawString(x, y, text)

    return _stamp_page(pdf_base64, page, draw)


def insert_image_in_pdf(pdf_base64: str, image_data_url: str, position_x: float, position_y: float, page: int = 0) -> str:
    """
    Draw a signature image scaled to fit the signature box, centred.

    Args:
        pdf_base64: Base64 encoded PDF.
        image_data_url: Image as a base64 data URL.
        position_x: Box left edge, points from the page's left side.
        position_y: Box top edge, points from the page's top.
        page: Zero-based page index.

    Returns:
        str: Base64 encoded PDF with the image drawn.

    Raises:
        ValueError: Undecodable image, unreadable PDF or page out of range.
    """
    image_bytes = decode_data_url(image_data_url)
    try:
        image = ImageReader(io.BytesIO(image_bytes))
        image_width, image_height = image.getSize()
    except Exception as e:
        raise ValueError(f"Signature image could not be read: {e}") from e

    scale = min(FIELD_WIDTH / image_width, FIELD_HEIGHT / image_height, 1)
    scaled_width = image_width * scale
    scaled_height = image_height * scale

    def draw(c: canvas.Canvas, page_height: float) -> None:
        x = position_x + (FIELD_WIDTH - scaled_width) / 2
        y = page_height - position_y - FIELD_HEIGHT / 2 - scaled_height / 2
        c.drawImage(image, x, y, width=scaled_width, height=scaled_height, mask="auto")

    return _stamp_page(pdf_base64, page, draw)
