"""
Sample file readers.

Two formats are supported:

* ``*.bin`` -- consecutive big-endian float64 pairs ``x, y`` with no
  header.
* anything else -- text, one sample per line, ``x`` and ``y`` separated
  by whitespace. Blank lines are ignored.

Both return an (N, 2) float64 array in file order; sorting is the
point set's job.
"""

from pathlib import Path
from typing import Union

import numpy as np

from .errors import SampleLoadError
from curvescope.logging import get_logger
logger = get_logger(__name__)

BINARY_SUFFIX = '.bin'
BINARY_DTYPE = np.dtype('>f8')


def load_samples(path: Union[str, Path]) -> np.ndarray:
    """Read samples from ``path``, choosing the format by suffix.

    Raises:
        SampleLoadError: file missing, unreadable, malformed or empty.
    """
    path = Path(path)
    if not path.is_file():
        raise SampleLoadError(f"File not found: {path}", str(path))

    if path.suffix.lower() == BINARY_SUFFIX:
        samples = load_binary(path)
    else:
        samples = load_text(path)

    if samples.shape[0] == 0:
        raise SampleLoadError(f"No samples in {path.name}", str(path))

    logger.debug(f"Read {samples.shape[0]} samples from {path}")
    return samples


def load_binary(path: Union[str, Path]) -> np.ndarray:
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise SampleLoadError(f"Cannot read {path}: {e}", str(path)) from e

    pair_size = 2 * BINARY_DTYPE.itemsize
    if len(raw) % pair_size:
        raise SampleLoadError(
            f"{Path(path).name}: size {len(raw)} is not a whole number of "
            f"{pair_size}-byte samples",
            str(path),
        )
    values = np.frombuffer(raw, dtype=BINARY_DTYPE)
    return _require_finite(values.astype(np.float64).reshape(-1, 2), path)


def load_text(path: Union[str, Path]) -> np.ndarray:
    try:
        lines = Path(path).read_text(encoding='utf-8').splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise SampleLoadError(f"Cannot read {path}: {e}", str(path)) from e

    rows = []
    for lineno, line in enumerate(lines, start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 2:
            raise SampleLoadError(
                f"{Path(path).name}:{lineno}: expected 2 values, got {len(fields)}",
                str(path),
            )
        try:
            rows.append((float(fields[0]), float(fields[1])))
        except ValueError as e:
            raise SampleLoadError(f"{Path(path).name}:{lineno}: {e}", str(path)) from e

    return _require_finite(np.asarray(rows, dtype=np.float64).reshape(-1, 2), path)


def _require_finite(samples: np.ndarray, path: Union[str, Path]) -> np.ndarray:
    bad = ~np.isfinite(samples).all(axis=1)
    if bad.any():
        first = int(np.flatnonzero(bad)[0])
        raise SampleLoadError(
            f"{Path(path).name}: sample {first + 1} is not finite: {samples[first].tolist()}",
            str(path),
        )
    return samples

