# furextract/services/fingerprint/hasher.py
"""
Dual fingerprint of a fetched media payload.

* **content digest** – SHA‑256 over the raw bytes, for exact duplicates.
* **perceptual hash** – 64‑bit gradient hash computed on DCT coefficients,
  tolerant to recompression and resizing, for near duplicates.

Only raster payloads can be hashed; :func:`fingerprint_submission` returns
animation records unchanged instead of trying (and failing) to decode them.
"""

import hashlib
import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from furextract.core.exceptions import ScrapeError
from furextract.models.submission import Fingerprint, Submission

HASH_WIDTH = 8
HASH_HEIGHT = 8

# The gradient compares each cell with its right neighbour, hence one extra column.
_GRID = (HASH_WIDTH + 1, HASH_HEIGHT)
# The DCT runs on a grid twice that size; only the low frequencies are kept.
_RESIZE = (_GRID[0] * 2, _GRID[1] * 2)


def _dct_matrix(n: int) -> np.ndarray:
    """Orthonormal DCT‑II basis of size ``n × n``."""
    k = np.arange(n).reshape(-1, 1)
    i = np.arange(n).reshape(1, -1)
    basis = np.cos(np.pi * (2 * i + 1) * k / (2 * n)) * np.sqrt(2.0 / n)
    basis[0, :] /= np.sqrt(2.0)
    return basis


def decode_image(data: bytes) -> Image.Image:
    """Decode ``data`` as a raster image or raise a non‑retryable error."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ScrapeError.decode_failed(exc) from exc
    return image


def perceptual_hash(image: Image.Image) -> bytes:
    """8‑byte gradient hash of ``image`` with DCT preprocessing."""
    gray = image.convert("L").resize(_RESIZE, Image.Resampling.LANCZOS)
    pixels = np.asarray(gray, dtype=np.float64)

    # rows = height, columns = width
    coeffs = _dct_matrix(_RESIZE[1]) @ pixels @ _dct_matrix(_RESIZE[0]).T
    low = coeffs[: _GRID[1], : _GRID[0]]

    bits = low[:, :-1] < low[:, 1:]
    return np.packbits(bits.astype(np.uint8).flatten()).tobytes()


def content_digest(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def compute_fingerprint(data: bytes, keep_raw: bool = False) -> Fingerprint:
    """
    Fingerprint a raw payload.

    Parameters
    ----------
    data: bytes
        Body of the binary fetch.
    keep_raw: bool
        Store ``data`` on the result as well (callers that persist the file).

    Raises
    ------
    ScrapeError
        Non‑retryable, when ``data`` is not a decodable raster image.
    """
    digest = content_digest(data)
    image = decode_image(data)
    return Fingerprint(
        perceptual_hash=perceptual_hash(image),
        content_digest=digest,
        content_size=len(data),
        raw_bytes=data if keep_raw else None,
    )


def fingerprint_submission(
    submission: Submission, data: bytes, keep_raw: bool = False
) -> Submission:
    """
    Return a copy of ``submission`` with its fingerprint populated.

    Animation content is returned as is – perceptual hashing is undefined
    for non‑raster media.
    """
    if not submission.is_image:
        return submission
    return submission.with_fingerprint(compute_fingerprint(data, keep_raw=keep_raw))
