# Copyright (c) 2026 Imgpal
# SPDX-License-Identifier: MIT

"""
Main palette derivation API.

This is the primary entry point for imgpal's derivation core.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from imgpal.derive.assemble import (
    DEFAULT_CENTER,
    DEFAULT_TRIALS,
    divergent_palette,
    parse_seq_by,
    qualitative_palette,
    sequential_palette,
)
from imgpal.derive.colorspace import encode_hex, hex_to_rgb, hsv_to_hex
from imgpal.derive.filter import (
    FULL_RANGE,
    as_rgb_array,
    filter_distribution,
    validate_range,
)
from imgpal.derive.quantize import quantize
from imgpal.errors import InvalidParameterError
from imgpal.schema import Palette, PaletteType

logger = logging.getLogger(__name__)

ColorLike = Union[str, Sequence[float]]

# Seconds to wait on a remote image
URL_TIMEOUT = 10
_URL_SCHEMES = ("http://", "https://")


def derive_palette(
    image: Union[str, Path, ArrayLike],
    n: int = 9,
    type: Union[str, PaletteType] = PaletteType.QUALITATIVE,
    *,
    k: int = 100,
    bw: Sequence[float] = FULL_RANGE,
    brightness: Sequence[float] = FULL_RANGE,
    saturation: Sequence[float] = FULL_RANGE,
    seq_by: Union[str, Sequence[str]] = "hsv",
    div_center: ColorLike = DEFAULT_CENTER,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    max_pixels: int = 0,  # 0 = no downsampling
    trials: int = DEFAULT_TRIALS,
) -> Palette:
    """
    Derive a qualitative, sequential or divergent palette from an image.

    Pipeline: distribution filter -> k-means quantization (qual/seq) ->
    palette assembly -> ramp interpolation (seq/div).

    The number of k-means centers ``k`` is the maximum number of colors
    considered for binning; it is distinct from ``n``, the palette size, and
    is capped at the number of distinct colors left after filtering. ``k``
    does not apply to divergent palettes, which split the filtered pixels
    into two poles directly.

    Randomness comes from a single generator consumed in a fixed order:
    k-means seeding, then dispersion selection, then ordering (qualitative).
    The same seed and inputs always give the same palette.

    Args:
        image: One of:
            - Path to image file (str or Path), loaded with Pillow
            - http(s) URL, fetched with requests
            - Array-like of shape (H, W, 3) or (N, 3), uint8 or float in [0, 1]
        n: Number of colors in the palette
        type: "qual", "seq" or "div" (or a PaletteType)
        k: Number of k-means centers for qualitative/sequential palettes
        bw: (lo, hi) RGB thresholds to drop near-black / near-white pixels
        brightness: (lo, hi) quantiles of HSV value to keep
        saturation: (lo, hi) quantiles of HSV saturation to keep
        seq_by: Sort precedence for sequential palettes, a permutation of
            "hsv". "hsv" suits images with several hues; "svh" or "vsh"
            often read better for images dominated by one hue.
        div_center: Center color for divergent palettes (hex or RGB in [0, 1])
        seed: Seed for a fresh generator (ignored if rng is given)
        rng: Explicit random generator
        max_pixels: Downsample to at most this many pixels (0 disables)
        trials: Random trials per qualitative search stage

    Returns:
        Palette of n hex colors. Qualitative palettes are capped to the
        number of available clusters if that is smaller than n.

    Raises:
        InvalidParameterError: On any violated precondition
        EmptyDistributionError: If the filter removes every pixel

    Example:
        >>> from imgpal import derive_palette
        >>> derive_palette("blue-yellow.jpg", n=3, type="div",
        ...                saturation=(0.75, 1), brightness=(0.75, 1), seed=1)
        Palette(colors=('#...', '#FFFFFF', '#...'), ...)
    """
    # Validate everything before touching pixels
    palette_type = _validate_type(type)
    n = _validate_count("n", n)
    k = _validate_count("k", k)
    trials = _validate_count("trials", trials)
    max_pixels = _validate_count("max_pixels", max_pixels, minimum=0)
    bw = validate_range("bw", bw)
    brightness = validate_range("brightness", brightness)
    saturation = validate_range("saturation", saturation)
    try:
        parse_seq_by(seq_by)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError("seq_by", str(e)) from e
    center = normalize_color("div_center", div_center)

    if rng is None:
        rng = np.random.default_rng(seed)

    pixels = load_image(image)
    if max_pixels > 0:
        height, width = pixels.shape[:2]
        if height * width > max_pixels:
            new_height, new_width = _fit_pixel_budget(height, width, max_pixels)
            pixels = _downsample(pixels, new_height, new_width)
            logger.debug("Downsampled %dx%d -> %dx%d", height, width,
                         pixels.shape[0], pixels.shape[1])

    samples = filter_distribution(pixels, bw, brightness, saturation)

    # A single distinct color: every strategy degenerates to n copies
    if samples.distinct_count() == 1:
        only = hsv_to_hex(*samples.hsv[0])
        logger.debug("Single distinct color %s; returning %d copies", only, n)
        controls = () if palette_type is PaletteType.QUALITATIVE else (only,)
        return Palette(colors=(only,) * n, type=palette_type, controls=controls)

    if palette_type is PaletteType.DIVERGENT:
        return divergent_palette(samples, n, rng, center=center)

    clusters = quantize(samples, k, rng)
    if palette_type is PaletteType.QUALITATIVE:
        return qualitative_palette(clusters, n, rng, trials=trials)
    return sequential_palette(clusters, n, seq_by=seq_by)


def load_image(
    image: Union[str, Path, ArrayLike],
) -> NDArray[np.float64]:
    """
    Load image from file, URL or validate array.

    Strings starting with "http://" or "https://" are fetched with requests
    (``pip install imgpal[url]``); other strings and Paths are opened as
    local files. Applies ICC profile conversion to sRGB if the image has an
    embedded color profile. Anything else is treated as a pixel array.

    Returns:
        (H, W, 3) float array of RGB values in [0, 1]. (N, 3) arrays are
        passed through as a single-row grid.
    """
    if isinstance(image, (str, Path)):
        # Load from file using PIL
        try:
            from PIL import Image
        except ImportError as e:
            raise ImportError(
                "Pillow is required for image loading. "
                "Install with: pip install imgpal[image]"
            ) from e

        source = image
        if isinstance(image, str) and image.lower().startswith(_URL_SCHEMES):
            source = io.BytesIO(_fetch(image))

        try:
            img = Image.open(source)
            img.load()
        except (OSError, ValueError) as e:
            raise InvalidParameterError("image", f"cannot read {image}: {e}") from e

        img = _to_srgb(img)
        pixels = np.asarray(img, dtype=np.uint8)

    else:
        try:
            pixels = np.asarray(image)
        except (TypeError, ValueError) as e:
            raise InvalidParameterError(
                "pixels", f"expected a pixel array, got {type(image).__name__}"
            ) from e

    rgb = as_rgb_array(pixels)
    if pixels.ndim == 3:
        return rgb.reshape(pixels.shape[0], pixels.shape[1], 3)
    return rgb.reshape(1, -1, 3)


def _fetch(url: str) -> bytes:
    """Download image bytes."""
    try:
        import requests
    except ImportError as e:
        raise ImportError(
            "requests is required for loading images from URLs. "
            "Install with: pip install imgpal[url]"
        ) from e

    try:
        response = requests.get(url, timeout=URL_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise InvalidParameterError("image", f"cannot fetch {url}: {e}") from e
    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.content


def _to_srgb(img):
    """Convert a PIL image to RGB, through its ICC profile when it has one."""
    if "icc_profile" in img.info:
        try:
            from PIL import ImageCms

            embedded_profile = ImageCms.ImageCmsProfile(
                io.BytesIO(img.info["icc_profile"])
            )
            srgb_profile = ImageCms.createProfile("sRGB")

            # Convert to RGB first if needed
            if img.mode != "RGB":
                img = img.convert("RGB")

            return ImageCms.profileToProfile(img, embedded_profile, srgb_profile)
        except Exception:
            # If ICC conversion fails, fall back to simple RGB conversion
            logger.debug("ICC conversion failed; using plain RGB conversion",
                         exc_info=True)

    if img.mode != "RGB":
        img = img.convert("RGB")
    return img


def _fit_pixel_budget(height: int, width: int, max_pixels: int) -> tuple[int, int]:
    """Largest aspect-preserving (height, width) with at most max_pixels pixels."""
    scale = (max_pixels / (height * width)) ** 0.5
    new_height = max(1, min(height, max_pixels, int(height * scale)))
    new_width = max(1, min(width, max_pixels // new_height))
    return new_height, new_width


def _downsample(
    pixels: NDArray[np.float64],
    new_height: int,
    new_width: int,
) -> NDArray[np.float64]:
    """Downsample image using PIL (Lanczos) with a slicing fallback."""
    try:
        from PIL import Image
    except ImportError:
        # Fallback: simple slicing (fast but lower quality)
        h, w = pixels.shape[:2]
        step_h = -(-h // new_height)
        step_w = -(-w // new_width)
        return pixels[::step_h, ::step_w]

    as_bytes = np.floor(pixels * 255.0 + 0.5).astype(np.uint8)
    img = Image.fromarray(as_bytes)
    img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)
    return np.asarray(img, dtype=np.float64) / 255.0


def normalize_color(name: str, color: ColorLike) -> str:
    """
    Normalize a hex string or RGB triple in [0, 1] to "#RRGGBB".

    Raises:
        InvalidParameterError: If color is neither
    """
    if isinstance(color, str):
        try:
            return encode_hex(*hex_to_rgb(color))
        except ValueError as e:
            raise InvalidParameterError(name, str(e)) from e
    try:
        r, g, b = (float(c) for c in color)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            name, f"expected hex string or (r, g, b), got {color!r}"
        ) from e
    if not all(0.0 <= c <= 1.0 for c in (r, g, b)):
        raise InvalidParameterError(name, f"RGB channels must be in [0, 1], got {color!r}")
    return encode_hex(r, g, b)


def _validate_type(value: Union[str, PaletteType]) -> PaletteType:
    try:
        return PaletteType.parse(value)
    except ValueError as e:
        raise InvalidParameterError("type", str(e)) from e


def _validate_count(name: str, value: int, minimum: int = 1) -> int:
    """Integer check against a lower bound (bools rejected)."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(name, f"expected an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(name, f"must be >= {minimum}, got {value}")
    return int(value)
