"""Dominant colour extraction by strided sampling and bucket counting.

Samples every STRIDE-th pixel of an RGBA buffer, floors each channel to a
multiple of BUCKET, counts identical buckets and keeps the TOP most
frequent. Equal counts keep scan order: the bucket seen first ranks first.

The caller crops the subject region first; center_region() does the
crop used for portraits (a centred square a third of the short side).
"""

import numpy as np
from PIL import Image

from aura_reader.core.types import ContractViolation, DecodeError, RGBSample

STRIDE = 10  # pixels, i.e. every 40th byte of RGBA data
BUCKET = 32
TOP = 5


def _as_rgba(pixels) -> np.ndarray:
    """View pixel data as an (N, 4) uint8 array."""
    if pixels is None:
        raise DecodeError('no pixel data')
    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise ContractViolation(f'expected uint8 RGBA pixels, got dtype {pixels.dtype}')
        arr = pixels
        if arr.ndim > 1 and arr.shape[-1] != 4:
            raise ContractViolation(f'expected RGBA pixels, got trailing dimension {arr.shape[-1]}')
        flat = arr.reshape(-1)
    else:
        flat = np.frombuffer(bytes(pixels), dtype=np.uint8)

    if flat.size == 0:
        raise DecodeError('no pixel data')
    if flat.size % 4:
        raise ContractViolation(f'RGBA buffer length {flat.size} is not a multiple of 4')
    return flat.reshape(-1, 4)


def extract_dominant_colors(pixels, stride: int = STRIDE, bucket: int = BUCKET, top: int = TOP) -> list[RGBSample]:
    """Return up to `top` quantized colours from RGBA pixels, most frequent first."""
    if stride < 1 or bucket < 1 or top < 1:
        raise ContractViolation(f'stride, bucket and top must be positive (got {stride}, {bucket}, {top})')

    rgba = _as_rgba(pixels)
    sampled = rgba[::stride, :3].astype(np.int64)
    quantized = (sampled // bucket) * bucket

    # Pack each bucket into one int so np.unique can count them
    keys = (quantized[:, 0] << 16) | (quantized[:, 1] << 8) | quantized[:, 2]
    unique, first_seen, counts = np.unique(keys, return_index=True, return_counts=True)

    # Descending count, then scan order
    order = np.lexsort((first_seen, -counts))[:top]

    return [
        RGBSample(
            r=int(unique[i] >> 16) & 0xFF,
            g=int(unique[i] >> 8) & 0xFF,
            b=int(unique[i]) & 0xFF,
            count=int(counts[i]),
        )
        for i in order
    ]


def center_region(image: Image.Image) -> bytes:
    """Crop the centred square (side = a third of the short edge) and return its RGBA bytes."""
    w, h = image.size
    if w == 0 or h == 0:
        raise DecodeError('image has no pixels')
    side = max(1, min(w, h) // 3)
    left = w // 2 - side // 2
    top = h // 2 - side // 2
    crop = image.convert('RGBA').crop((left, top, left + side, top + side))
    return crop.tobytes()


def extract_from_image(image: Image.Image, **kwargs) -> list[RGBSample]:
    """Crop the subject region of a decoded image and extract its dominant colours."""
    return extract_dominant_colors(center_region(image), **kwargs)
