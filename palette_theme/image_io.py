# palette_theme/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import PixelBuffer

"""
Image file → PixelBuffer adapter (RGBA in sRGB) for callers that start from
files. Decoding is Pillow's; extraction itself only ever sees PixelBuffers.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def load_pixel_buffer(path: Path, *, max_height: Optional[int] = None) -> PixelBuffer:
    """
    Decode an image file into a PixelBuffer.

    max_height: if set and smaller than the image, resize (Lanczos) so that
    height == max_height, keeping aspect.
    """
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    if max_height is not None and 0 < max_height < im.height:
        dst_w = max(1, int(round(im.width * (max_height / float(im.height)))))
        im = im.resize((dst_w, max_height), resample=Image.Resampling.LANCZOS)
    arr = np.array(im, dtype=np.uint8)
    return PixelBuffer(arr)


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = ["load_pixel_buffer", "is_image_file"]
