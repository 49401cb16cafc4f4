"""BED interval files and region query strings."""

from __future__ import annotations

import io
import os
import re
from typing import IO, Iterable, Union

_U32 = re.compile(r"\+?[0-9]+")
_U32_MAX = 0xFFFFFFFF

BedRegions = dict[str, list[tuple[int, int]]]


class BedFormatError(ValueError):
    """Raised when a BED record or region query is malformed."""


def _parse_u32(token: str) -> int:
    if not _U32.fullmatch(token):
        raise BedFormatError(f"Not an unsigned integer: {token!r}")
    value = int(token)
    if value > _U32_MAX:
        raise BedFormatError(f"Integer out of range: {token!r}")
    return value


def parse_record(line: str) -> tuple[str, int, int]:
    """Parse one BED line into (reference name, start, end)."""
    components = line.split()
    if len(components) < 3:
        raise BedFormatError(f"Incomplete BED record: {line!r}")
    name, start_token, end_token = components[:3]
    start = _parse_u32(start_token)
    end = _parse_u32(end_token)
    if end < start:
        raise BedFormatError(f"BED record ends before it starts: {line!r}")
    return name, start, end


def _lines(source: Union[str, bytes, IO]) -> Iterable[str]:
    if isinstance(source, bytes):
        source = source.decode("utf-8")
    if isinstance(source, str):
        return source.splitlines()
    return (
        line.decode("utf-8") if isinstance(line, bytes) else line
        for line in source
    )


def parse_bed(source: Union[str, bytes, IO]) -> BedRegions:
    """Group BED intervals by reference name, keeping their order."""
    regions: BedRegions = {}
    for line in _lines(source):
        name, start, end = parse_record(line.rstrip("\r\n"))
        regions.setdefault(name, []).append((start, end))
    return regions


def parse_bed_file(path: Union[str, os.PathLike]) -> BedRegions:
    """Read and parse a BED file from disk."""
    with open(path, "r", encoding="utf-8", newline="") as handle:
        return parse_bed(io.StringIO(handle.read()))


def parse_region_query(query: str) -> tuple[str, int, int]:
    """Parse a query of the form ``<ref>:<start>-<end>``."""
    parts = query.split(":")
    if len(parts) < 2:
        raise BedFormatError(f"Region query lacks a range: {query!r}")
    ref_name = parts[0]
    bounds = parts[1].split("-")
    if len(bounds) < 2:
        raise BedFormatError(f"Region query lacks an end: {query!r}")
    left = _parse_u32(bounds[0])
    right = _parse_u32(bounds[1])
    if len(bounds) > 2 or right < left:
        raise BedFormatError(f"Invalid region query: {query!r}")
    return ref_name, left, right