"""
depth.py
========

Depth fields for the DepthTopo generator.

A depth field is a 2D float array in [0, 1]. It comes from one of two places:

1) An external depth-estimation model, wrapped in ``DepthModel``. Loading is
   asynchronous and may fail; callers can ``poll()`` the model without
   blocking and only ever receive a plain array from it.
2) The luminance of the source image, computed locally. This is the fallback
   whenever the model is not ready or inference raises.

``acquire_depth_field`` ties both together and reports which source was used
as a status string instead of raising.
"""

import asyncio
import enum
import inspect
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_MODEL = "LiheYoung/depth-anything-small-hf"


# ---------------------------- Field helpers ---------------------------------

def compute_depth_map(rgba: np.ndarray) -> np.ndarray:
    """Luminance (0.299R + 0.587G + 0.114B) / 255 of an (h, w, 3|4) image array."""
    data = np.asarray(rgba, dtype=np.float64)
    return (0.299 * data[..., 0] + 0.587 * data[..., 1] + 0.114 * data[..., 2]) / 255.0


def _depth_pixels(result: Any) -> np.ndarray:
    """Pull a (h, w) array out of a depth-model result."""
    depth = result["depth"] if isinstance(result, dict) else result
    if isinstance(depth, Image.Image):
        return np.asarray(depth.convert("L"), dtype=np.float64)
    if hasattr(depth, "data") and hasattr(depth, "width") and hasattr(depth, "height"):
        flat = np.asarray(depth.data, dtype=np.float64)
        return flat.reshape(int(depth.height), int(depth.width))
    return np.asarray(depth, dtype=np.float64)


def convert_depth_result_to_map(result: Any, target_width: int, target_height: int) -> np.ndarray:
    """Nearest-neighbor resample of a model's depth output to the target size, / 255."""
    src = _depth_pixels(result)
    src_h, src_w = src.shape
    xs = (np.arange(target_width) * src_w) // target_width
    ys = (np.arange(target_height) * src_h) // target_height
    return src[ys[:, None], xs[None, :]] / 255.0


def apply_gaussian_blur(field: np.ndarray, radius: int) -> np.ndarray:
    """Separable Gaussian blur with edge clamping; sigma is radius / 2 (0.5 if that is 0)."""
    radius = int(radius)
    field = np.asarray(field, dtype=np.float64)
    if radius == 0:
        return field

    size = radius * 2 + 1
    sigma = radius / 2 or 0.5
    offsets = np.arange(size) - radius
    kernel = np.exp(-(offsets * offsets) / (2 * sigma * sigma))
    kernel /= kernel.sum()

    height, width = field.shape
    padded = np.pad(field, ((0, 0), (radius, radius)), mode="edge")
    temp = np.zeros_like(field)
    for k in range(size):
        temp += padded[:, k:k + width] * kernel[k]

    padded = np.pad(temp, ((radius, radius), (0, 0)), mode="edge")
    result = np.zeros_like(field)
    for k in range(size):
        result += padded[k:k + height, :] * kernel[k]
    return result


def depth_field_to_image(field: np.ndarray) -> Image.Image:
    """Grayscale preview of a depth field."""
    gray = np.floor(np.asarray(field, dtype=np.float64) * 255)
    return Image.fromarray(np.clip(gray, 0, 255).astype(np.uint8))


def load_image(path: str, max_dim: int = 500) -> Image.Image:
    """Open an image as RGBA, scaled down so neither side exceeds ``max_dim``."""
    img = Image.open(path).convert("RGBA")
    width, height = img.size
    if width > max_dim or height > max_dim:
        s = max_dim / max(width, height)
        img = img.resize((int(math.floor(width * s)), int(math.floor(height * s))))
    return img


# ---------------------------- External model --------------------------------

class DepthModelState(enum.Enum):
    NOT_READY = "not_ready"
    READY = "ready"
    FAILED = "failed"


Estimator = Callable[[Image.Image], Any]
Loader = Callable[[], Awaitable[Estimator]]


async def load_transformers_estimator(model_id: str = DEFAULT_DEPTH_MODEL) -> Estimator:
    """Build a transformers ``depth-estimation`` pipeline off the event loop."""
    from transformers import pipeline

    return await asyncio.to_thread(pipeline, "depth-estimation", model=model_id)


class DepthModel:
    """An estimator that becomes usable once its async loader has finished.

    ``poll()`` reports the state without waiting. A failed load leaves the
    model in ``FAILED``; ``load()`` may be awaited again to retry.
    """

    def __init__(self, loader: Optional[Loader] = None):
        self._loader = loader or load_transformers_estimator
        self._estimator: Optional[Estimator] = None
        self.state = DepthModelState.NOT_READY
        self.error: Optional[BaseException] = None

    def poll(self) -> DepthModelState:
        return self.state

    async def load(self) -> DepthModelState:
        if self.state is DepthModelState.READY:
            return self.state
        try:
            self._estimator = await self._loader()
        except Exception as exc:
            logger.warning("depth model failed to load: %s", exc)
            self.error = exc
            self.state = DepthModelState.FAILED
        else:
            self.error = None
            self.state = DepthModelState.READY
            logger.info("depth model ready")
        return self.state

    async def estimate(self, image: Image.Image) -> Any:
        if self._estimator is None:
            raise RuntimeError("depth model is not ready")
        if inspect.iscoroutinefunction(self._estimator):
            return await self._estimator(image)
        # Plain callables (a transformers pipeline) run in a worker thread.
        result = await asyncio.to_thread(self._estimator, image)
        if asyncio.iscoroutine(result):
            result = await result
        return result


@dataclass
class DepthAcquisition:
    field: np.ndarray
    source: str     # "ai" or "luminance"
    status: str


async def acquire_depth_field(image: Image.Image, model: Optional[DepthModel] = None) -> DepthAcquisition:
    """Depth for ``image`` from the model when possible, else from luminance."""
    rgba = np.asarray(image.convert("RGBA"))
    width, height = image.size

    if model is not None and model.poll() is DepthModelState.READY:
        try:
            result = await model.estimate(image)
            field = convert_depth_result_to_map(result, width, height)
        except Exception as exc:
            logger.warning("AI depth failed, using luminance: %s", exc)
            return DepthAcquisition(compute_depth_map(rgba), "luminance", "luminance fallback")
        return DepthAcquisition(field, "ai", "AI depth")

    status = "luminance" if model is None else "luminance (model %s)" % model.poll().value
    return DepthAcquisition(compute_depth_map(rgba), "luminance", status)
