"""Filesystem helpers: atomic image/YAML writes and YAML loading.

Every write goes to a sibling tmp file and is renamed over the target, so a
viewer polling an output directory never opens a half-written PNG and a
scene file is never left truncated.

Usage:
    from rasterkit.utils import fs
    fs.atomic_save_image(canvas.pixels, out_dir / "scene.png")
    scene_dict = fs.load_yaml("configs/scenes/demo.v1.yaml")

Named `fs.py` rather than `io.py` to stay clear of the stdlib module.
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import numpy as np
import yaml
from PIL import Image

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """mkdir -p; returns the directory as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _replace_atomically(path: Path, tmp_path: Path, write: Callable[[Path], None], what: str) -> None:
    ensure_dir(path.parent)
    try:
        write(tmp_path)
        # POSIX rename overwrites an existing target in one step
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {what} {path} atomically: {e}") from e


def atomic_write_bytes(path: PathLike, data: bytes, tmp_suffix: str = ".tmp") -> None:
    """Write raw bytes through a fsync'd tmp file.

    Raises
    ------
    RuntimeError
        If writing or renaming fails; the tmp file is removed first
    """
    path = Path(path)

    def _write(tmp: Path) -> None:
        with open(tmp, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    _replace_atomically(path, path.with_suffix(path.suffix + tmp_suffix), _write, "file")


def _to_uint8(img: np.ndarray) -> np.ndarray:
    img = np.asarray(img)
    if np.issubdtype(img.dtype, np.floating):
        img = (np.clip(img, 0.0, 1.0) * 255.0).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[..., 0]
    return img


def atomic_save_image(
    img: np.ndarray,
    path: PathLike,
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Encode a pixel buffer with Pillow and rename it into place.

    Parameters
    ----------
    img : np.ndarray
        (H, W, 4) RGBA, (H, W, 3) RGB, (H, W, 1) or (H, W) gray.
        Float buffers are taken as [0, 1] and clipped; other integer
        dtypes are clipped to [0, 255].
    path : str or Path
        Target; the extension picks the encoder (.png, .jpg, ...)
    pil_kwargs : dict, optional
        Passed through to Image.save (e.g. optimize=True)

    Raises
    ------
    RuntimeError
        If encoding or renaming fails
    """
    path = Path(path)
    pil_img = Image.fromarray(_to_uint8(img))
    # "scene.tmp.png" keeps the extension Pillow dispatches on
    tmp_path = path.with_name(f"{path.stem}.tmp{path.suffix}")
    _replace_atomically(path, tmp_path, lambda tmp: pil_img.save(tmp, **(pil_kwargs or {})), "image")


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """safe_dump obj to path, block style, keys in insertion order."""
    text = yaml.safe_dump(obj, default_flow_style=False, sort_keys=False, allow_unicode=True)
    atomic_write_bytes(path, text.encode('utf-8'))


def load_yaml(path: PathLike) -> Dict[str, Any]:
    """safe_load a YAML file.

    Raises
    ------
    FileNotFoundError
        If path does not exist
    yaml.YAMLError
        If the file is not valid YAML (message names the file)
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")

    text = path.read_text(encoding='utf-8')
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
