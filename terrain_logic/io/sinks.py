# terrain_logic/io/sinks.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import imageio.v2 as imageio
import numpy as np

from setting.config import LayerBinding

logger = logging.getLogger(__name__)


def to_uint16(height01: np.ndarray) -> np.ndarray:
    arr = np.clip(np.asarray(height01, dtype=np.float32), 0.0, 1.0)
    return np.round(arr * 65535.0).astype(np.uint16)


def to_uint8(weights01: np.ndarray) -> np.ndarray:
    arr = np.clip(np.asarray(weights01, dtype=np.float32), 0.0, 1.0)
    return np.round(arr * 255.0).astype(np.uint8)


def save_png16(path: Path, data_u16: np.ndarray) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    imageio.imwrite(path.as_posix(), data_u16)


def splat_to_image(blend_weights: np.ndarray) -> np.ndarray:
    """(W, H, L) weights -> (H, W, 3|4) uint8 image; missing channels stay black."""
    W, H, L = blend_weights.shape
    if L > 4:
        raise ValueError(f"a PNG splatmap holds at most 4 channels, got {L}")
    channels = 4 if L == 4 else 3
    img = np.zeros((H, W, channels), dtype=np.uint8)
    img[..., :L] = to_uint8(blend_weights).transpose(1, 0, 2)
    return img


class MemoryTerrainSink:
    """Keeps the last replaced payload in memory."""

    def __init__(self):
        self.height_grid: Optional[np.ndarray] = None
        self.blend_weights: Optional[np.ndarray] = None
        self.layer_binding: Optional[LayerBinding] = None
        self.replace_count = 0

    def replace(self, height_grid: np.ndarray, blend_weights: np.ndarray, layer_binding: LayerBinding) -> None:
        self.height_grid = np.array(height_grid, copy=True)
        self.blend_weights = np.array(blend_weights, copy=True)
        self.layer_binding = layer_binding
        self.replace_count += 1


class PngTerrainSink:
    """
    Writes a terrain to ``out_dir``:
      height.png    - uint16 grayscale, rows are z, columns are x
      splat.png     - one color channel per texture layer (RGB or RGBA)
      metadata.json - channel order and array shapes
    Each replace overwrites the previous files.
    """

    def __init__(self, out_dir: str | Path):
        self.out_dir = Path(out_dir)

    def replace(self, height_grid: np.ndarray, blend_weights: np.ndarray, layer_binding: LayerBinding) -> None:
        if height_grid.ndim != 2:
            raise ValueError(f"height grid must be 2D, got shape {height_grid.shape}")
        if blend_weights.ndim != 3 or blend_weights.shape[2] != len(layer_binding.channels):
            raise ValueError(
                f"blend weights {blend_weights.shape} do not match channels {layer_binding.channels}"
            )

        self.out_dir.mkdir(parents=True, exist_ok=True)
        save_png16(self.out_dir / "height.png", to_uint16(height_grid).T)
        imageio.imwrite((self.out_dir / "splat.png").as_posix(), splat_to_image(blend_weights))

        meta = {
            "encoding": {"height": "uint16_0..65535", "splat": "uint8_0..255"},
            "height_shape": list(height_grid.shape),
            "splat_shape": list(blend_weights.shape),
            "channels": list(layer_binding.channels),
        }
        with open(self.out_dir / "metadata.json", "w", encoding="utf-8") as f:
            json.dump(meta, f, ensure_ascii=False, indent=2)

        logger.info("Terrain written to %s", self.out_dir)
