import os
import struct

from opensub.constants import MOVIE_HASH_CHUNK_SIZE
from opensub.errors import MovieHashError

_LONGLONG_FORMAT = f"<{MOVIE_HASH_CHUNK_SIZE // 8}Q"


def compute_movie_hash(path: str) -> tuple[str, int]:
    """
    Compute the OpenSubtitles hash of a video file.

    The hash is the file size plus the 64-bit little-endian checksums of the
    first and last 64 KiB, truncated to 64 bits.

    Args:
        path: Path to the video file.

    Returns:
        A tuple of the 16-character hex hash and the file size in bytes.

    Raises:
        MovieHashError: If the file cannot be read or is smaller than 128 KiB.
    """
    try:
        with open(path, "rb") as f:
            filesize = os.fstat(f.fileno()).st_size
            if filesize < MOVIE_HASH_CHUNK_SIZE * 2:
                raise MovieHashError(f"File is too small to hash ({filesize} bytes): {path}")

            filehash = filesize
            filehash += sum(struct.unpack(_LONGLONG_FORMAT, f.read(MOVIE_HASH_CHUNK_SIZE)))
            f.seek(-MOVIE_HASH_CHUNK_SIZE, os.SEEK_END)
            filehash += sum(struct.unpack(_LONGLONG_FORMAT, f.read(MOVIE_HASH_CHUNK_SIZE)))
    except OSError as e:
        raise MovieHashError(f"Cannot read {path}: {e}") from e

    return f"{filehash & 0xFFFFFFFFFFFFFFFF:016x}", filesize
