"""Streaming content digests for files."""

import hashlib
import os

DEFAULT_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 64 * 1024


class ContentHasher:
    """Computes a hex digest of a file's bytes, reading it in fixed-size chunks.

    Args:
        algorithm: Any algorithm name accepted by hashlib.new().
        chunk_size: Number of bytes read per chunk.

    Raises:
        ValueError: If the algorithm is unknown or chunk_size is not positive.
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        if algorithm.lower().startswith("shake_"):
            msg = f"Variable-length algorithm not supported: {algorithm}"
            raise ValueError(msg)
        # Fail on construction rather than on the first file
        hashlib.new(algorithm)

        self._algorithm = algorithm
        self._chunk_size = chunk_size

    @property
    def algorithm(self) -> str:
        """Name of the hash algorithm."""
        return self._algorithm

    def digest(self, path: str | os.PathLike[str]) -> str:
        """Return the hex digest of the file at path.

        Raises:
            OSError: If the file cannot be opened or a read fails midway.
        """
        accumulator = hashlib.new(self._algorithm)
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(self._chunk_size), b""):
                accumulator.update(chunk)
        return accumulator.hexdigest()
