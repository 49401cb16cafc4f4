"""Block compression codecs used for GBAM column data."""

from __future__ import annotations

import gzip
import zlib
from enum import Enum
from typing import Union

import brotli
import lz4.block
import zstandard

_GZIP_LEVEL = 6
_BROTLI_QUALITY = 6
_BROTLI_WINDOW = 22
_ZSTD_LEVEL = 15

_DECODE_ERRORS = (
    OSError,
    EOFError,
    zlib.error,
    brotli.error,
    zstandard.ZstdError,
    lz4.block.LZ4BlockError,
)


class CodecError(ValueError):
    """Raised when a block cannot be compressed or decompressed."""


class Codec(Enum):
    """Compression applied to a column's blocks; values are the names stored in file metadata."""

    GZIP = "Gzip"
    LZ4 = "Lz4"
    BROTLI = "Brotli"
    ZSTD = "Zstd"
    NO_COMPRESSION = "NoCompression"


CodecLike = Union[Codec, str]


def _as_codec(codec: CodecLike) -> Codec:
    if isinstance(codec, Codec):
        return codec
    try:
        return Codec(codec)
    except ValueError:
        raise ValueError(f"Unknown codec: {codec!r}") from None


def compress(data: bytes, codec: CodecLike) -> bytes:
    """Compress one block of column data with the given codec."""
    codec = _as_codec(codec)
    data = bytes(data)
    if codec is Codec.GZIP:
        return gzip.compress(data, compresslevel=_GZIP_LEVEL, mtime=0)
    if codec is Codec.LZ4:
        try:
            return lz4.block.compress(data, mode="default", store_size=False)
        except lz4.block.LZ4BlockError as exc:
            raise CodecError("Compression error") from exc
    if codec is Codec.BROTLI:
        return brotli.compress(data, quality=_BROTLI_QUALITY, lgwin=_BROTLI_WINDOW)
    if codec is Codec.ZSTD:
        try:
            return zstandard.ZstdCompressor(level=_ZSTD_LEVEL).compress(data)
        except zstandard.ZstdError as exc:
            raise CodecError("Zstd compression error") from exc
    return data


def decompress(data: bytes, codec: CodecLike, uncompressed_size: int) -> bytes:
    """Decompress one block; ``uncompressed_size`` is the size recorded in block metadata."""
    codec = _as_codec(codec)
    if uncompressed_size < 0:
        raise ValueError(f"Negative uncompressed size: {uncompressed_size}")
    if uncompressed_size == 0:
        return b""
    data = bytes(data)
    try:
        if codec is Codec.GZIP:
            return gzip.decompress(data)
        if codec is Codec.LZ4:
            return lz4.block.decompress(data, uncompressed_size=uncompressed_size)
        if codec is Codec.BROTLI:
            return brotli.decompress(data)
        if codec is Codec.ZSTD:
            return zstandard.ZstdDecompressor().decompressobj().decompress(data)
    except _DECODE_ERRORS as exc:
        raise CodecError(f"Decompression failed for {codec.value} block") from exc
    return data