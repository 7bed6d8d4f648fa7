"""Image codec: decode, resize and re-encode raster images with Pillow.

Resize semantics:
    Target dimensions are taken literally (no aspect-ratio preservation).
    Upscaling is allowed. Resampling always uses Lanczos.

Encoding:
    Output is always JPEG. Images with an alpha channel or a palette are
    flattened onto a white background and converted to RGB first.

These functions are blocking (CPU-bound); async callers should run them via
``asyncio.to_thread``.
"""

import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError  # type: ignore[import-untyped]

from thumbnailer.constants import DEFAULT_JPEG_QUALITY
from thumbnailer.exceptions import DecodeError, EncodeError
from thumbnailer.utils.filesystem import write_file
from thumbnailer.utils.logging import get_logger

log = get_logger(__name__)

RESAMPLING_FILTER = Image.Resampling.LANCZOS
OUTPUT_FORMAT = "JPEG"


def decode(data: bytes) -> Image.Image:
    """Decode bytes into a fully loaded Pillow image.

    Args:
        data: Raw image bytes in any format Pillow understands

    Returns:
        Loaded PIL Image.

    Raises:
        DecodeError: If the bytes are empty, truncated, corrupt, or not an image.
    """
    if not data:
        raise DecodeError("Cannot decode empty image data")

    try:
        image = Image.open(io.BytesIO(data))
        # Force pixel decoding so truncated files fail here
        image.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e

    return image


def resize(image: Image.Image, width: int, height: int) -> Image.Image:
    """Resize an image to exactly (width, height) with a Lanczos filter.

    Bilevel and palette images are converted to grayscale or RGB(A) first,
    so the result is never in mode "1" or "P".

    Raises:
        ValueError: If width or height is not a positive integer.
        EncodeError: If Pillow cannot resample the image.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Resize dimensions must be positive, got {width}x{height}")

    # Pillow silently falls back to NEAREST for these two modes
    if image.mode == "1":
        image = image.convert("L")
    elif image.mode == "P":
        image = image.convert("RGBA" if "transparency" in image.info else "RGB")

    try:
        return image.resize((width, height), RESAMPLING_FILTER)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Cannot resize image to {width}x{height}: {e}") from e


def _to_rgb(image: Image.Image) -> Image.Image:
    if image.mode == "RGB":
        return image

    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")

    if image.mode in ("RGBA", "LA"):
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.getchannel("A"))
        return background

    return image.convert("RGB")


def encode(image: Image.Image, quality: int = DEFAULT_JPEG_QUALITY) -> bytes:
    """Encode an image as JPEG.

    Args:
        image: Image to encode (any mode)
        quality: JPEG quality (1-95)

    Returns:
        JPEG bytes.

    Raises:
        EncodeError: If conversion or encoding fails.
    """
    buffer = io.BytesIO()
    try:
        _to_rgb(image).save(buffer, OUTPUT_FORMAT, quality=quality)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Cannot encode image as {OUTPUT_FORMAT}: {e}") from e

    return buffer.getvalue()


def resize_file(
    input_path: Path,
    output_path: Path,
    width: int,
    height: int,
    quality: int = DEFAULT_JPEG_QUALITY,
) -> Path:
    """Decode ``input_path``, resize it, and write a JPEG to ``output_path``.

    Args:
        input_path: Raw downloaded image
        output_path: Destination for the resized JPEG
        width: Target width in pixels
        height: Target height in pixels
        quality: JPEG quality

    Returns:
        ``output_path``

    Raises:
        DecodeError: If the input cannot be read or decoded.
        EncodeError: If resizing or encoding fails.
        FilesystemError: If the output file cannot be written.
    """
    try:
        data = input_path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Cannot read raw image {input_path}: {e}") from e

    image = decode(data)
    try:
        image = _to_rgb(image)
    except (OSError, ValueError) as e:
        raise DecodeError(f"Cannot convert {input_path} to RGB: {e}") from e

    encoded = encode(resize(image, width, height), quality=quality)

    write_file(output_path, encoded)

    log.info("image_resized", output_path=str(output_path), width=width, height=height)
    return output_path
