"""Per-base read depth over sorted alignment records."""

from __future__ import annotations

import gzip
import os
from bisect import bisect_left
from dataclasses import dataclass
from itertools import accumulate
from typing import Iterable, Iterator, Optional, Sequence, Union

# Unmapped, secondary, QC-failed and duplicate reads add depth at one base only.
_SINGLE_BASE_FLAGS = 0b11100000100


@dataclass(frozen=True)
class DepthUnit:
    """The parts of an alignment record that depth calculation needs."""

    refid: int = 0
    pos: int = 0
    cigar: int = 0
    """Number of reference bases covered by the CIGAR."""
    flag: int = 0

    def covered_bases(self) -> int:
        """Bases this record adds depth to, starting at ``pos``."""
        if self.flag & _SINGLE_BASE_FLAGS:
            return 1
        return self.cigar or 1


def calc_depth(
    units: Sequence[DepthUnit],
    ref_id: int,
    ref_len: int,
    order: Optional[Sequence[int]] = None,
) -> list[int]:
    """Depth at every position of one reference sequence.

    ``units`` must be sorted by reference id when visited through ``order``
    (a list of indices into ``units``; the identity order if omitted), with
    unmapped records (reference id -1) last. The result has ``ref_len + 1``
    entries.
    """
    if ref_len < 0:
        raise ValueError(f"Negative reference length: {ref_len}")
    if order is None:
        order = range(len(units))
    if len(order) != len(units):
        raise ValueError("Order must list every record exactly once")

    def unit_at(position: int) -> DepthUnit:
        return units[order[position]]

    def at_or_after(position: int) -> bool:
        refid = unit_at(position).refid
        return refid >= ref_id or refid == -1

    scan_line = [0] * (ref_len + 1)
    first = bisect_left(range(len(order)), True, key=at_or_after)
    if first == len(order) or unit_at(first).refid != ref_id:
        return scan_line

    for position in range(first, len(order)):
        unit = unit_at(position)
        if unit.refid != ref_id:
            break
        if unit.cigar == 0:
            continue
        start = unit.pos
        end = start + unit.covered_bases()
        if start < 0 or end > ref_len:
            raise ValueError(
                f"Read at {start}..{end} lies outside reference of length {ref_len}"
            )
        scan_line[start] += 1
        scan_line[end] -= 1

    return list(accumulate(scan_line))


def _clamped(region: tuple[int, int], length: int) -> range:
    start, end = region
    return range(start, min(end, length))


def per_base_lines(
    chrom: str, coverage: Sequence[int], regions: Iterable[tuple[int, int]]
) -> Iterator[str]:
    """Yield ``chrom<TAB>pos<TAB>depth`` lines for covered positions in each region."""
    for region in regions:
        for coord in _clamped(region, len(coverage)):
            depth = coverage[coord]
            if depth > 0:
                yield f"{chrom}\t{coord}\t{depth}\n"


def bed_region_lines(
    chrom: str, coverage: Sequence[int], regions: Iterable[tuple[int, int]]
) -> Iterator[str]:
    """Yield BED lines ``chrom<TAB>start<TAB>end<TAB>depth`` for runs of equal depth."""
    for region in regions:
        coords = _clamped(region, len(coverage))
        if not coords:
            raise ValueError(f"Region {region} covers no positions of {chrom}")
        run_start = coords.start
        run_depth = coverage[run_start]
        for coord in coords[1:]:
            depth = coverage[coord]
            if depth != run_depth:
                yield f"{chrom}\t{run_start}\t{coord}\t{run_depth}\n"
                run_start, run_depth = coord, depth
        yield f"{chrom}\t{run_start}\t{coords.stop}\t{run_depth}\n"


def write_bed_gz(path: Union[str, os.PathLike], lines: Iterable[str]) -> int:
    """Write lines to a gzip-compressed file; return the number of lines written."""
    count = 0
    with gzip.open(path, "wb") as out:
        for line in lines:
            out.write(line.encode("utf-8"))
            count += 1
    return count


def chr_name_mapping(
    ref_seqs: Iterable[tuple[str, int]], names: Iterable[str]
) -> dict[str, Optional[int]]:
    """Map each name to its reference id in ``ref_seqs``, or None if absent."""
    name_to_ref_id = {name: index for index, (name, _) in enumerate(ref_seqs)}
    return {name: name_to_ref_id.get(name) for name in names}