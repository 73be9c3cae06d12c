"""Image decode/encode at the pipeline boundary.

Decoding accepts whatever the caller holds: a PIL image, encoded bytes, a
`data:image/...;base64,` URL or a path. Every failure surfaces as
DecodeError so callers can take the seed fallback.
"""

import base64
import binascii
import io
import os

from PIL import Image, UnidentifiedImageError

from aura_reader.core.types import DecodeError

DEFAULT_QUALITY = 90  # toDataURL('image/jpeg', 0.9)


def _data_url_bytes(url: str) -> bytes:
    header, sep, payload = url.partition(',')
    if not sep:
        raise DecodeError('data URL has no payload')
    if not header.endswith(';base64'):
        raise DecodeError(f'unsupported data URL encoding: {header[:40]}')
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f'invalid base64 payload: {e}') from e


def read_source_bytes(source: bytes | str | os.PathLike) -> bytes:
    """Return encoded image bytes for a data URL, a path, or bytes as-is."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, str) and source.startswith('data:'):
        return _data_url_bytes(source)
    try:
        with open(source, 'rb') as f:
            return f.read()
    except OSError as e:
        raise DecodeError(f'cannot read {source}: {e}') from e


def decode_image(source: Image.Image | bytes | str | os.PathLike) -> Image.Image:
    """Decode source into a fully loaded RGB image, or raise DecodeError."""
    if isinstance(source, Image.Image):
        return source.convert('RGB')

    data = read_source_bytes(source)
    if not data:
        raise DecodeError('empty image data')
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert('RGB')
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f'cannot decode image: {e}') from e


def encode_jpeg(image: Image.Image, quality: int = DEFAULT_QUALITY) -> bytes:
    """Re-encode an image as JPEG bytes at the given quality (1-95)."""
    buf = io.BytesIO()
    image.convert('RGB').save(buf, format='JPEG', quality=quality)
    return buf.getvalue()


def to_data_url(image: Image.Image, quality: int = DEFAULT_QUALITY) -> str:
    """Encode as a `data:image/jpeg;base64,...` URL."""
    b64 = base64.b64encode(encode_jpeg(image, quality)).decode('ascii')
    return f'data:image/jpeg;base64,{b64}'
