"""Alignment flag statistics in the style of ``samtools flagstat``."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import IntFlag
from typing import Iterable

_VALID_BITS = 0xFFF


class BamFlag(IntFlag):
    """Bitwise flags of a BAM alignment record."""

    PAIRED = 1
    PROPER_PAIR = 2
    UNMAP = 4
    MUNMAP = 8
    REVERSE = 16
    MREVERSE = 32
    READ1 = 64
    READ2 = 128
    SECONDARY = 256
    QCFAIL = 512
    DUP = 1024
    SUPPLEMENTARY = 2048


def _pair() -> list[int]:
    return [0, 0]


def percent(n: int, total: int) -> str:
    """Share of ``n`` in ``total`` with two decimals, or ``N/A`` if total is zero."""
    if total == 0:
        return "N/A"
    return f"{n / total * 100.0:.2f}%"


@dataclass
class FlagStats:
    """Counters kept as [QC-passed, QC-failed] pairs."""

    n_reads: list[int] = field(default_factory=_pair)
    n_mapped: list[int] = field(default_factory=_pair)
    n_pair_all: list[int] = field(default_factory=_pair)
    n_pair_map: list[int] = field(default_factory=_pair)
    n_pair_good: list[int] = field(default_factory=_pair)
    n_sgltn: list[int] = field(default_factory=_pair)
    n_read1: list[int] = field(default_factory=_pair)
    n_read2: list[int] = field(default_factory=_pair)
    n_dup: list[int] = field(default_factory=_pair)
    n_diffchr: list[int] = field(default_factory=_pair)
    n_diffhigh: list[int] = field(default_factory=_pair)
    n_secondary: list[int] = field(default_factory=_pair)
    n_supp: list[int] = field(default_factory=_pair)
    n_primary: list[int] = field(default_factory=_pair)
    n_pmapped: list[int] = field(default_factory=_pair)
    n_pdup: list[int] = field(default_factory=_pair)

    def collect(self, flag: int, ref_id: int, next_ref_id: int, mapq: int) -> None:
        """Account for one alignment record."""
        if flag < 0 or flag & ~_VALID_BITS:
            raise ValueError(f"Invalid BAM flag: {flag}")
        flags = BamFlag(flag)
        w = 1 if BamFlag.QCFAIL in flags else 0
        unmapped = BamFlag.UNMAP in flags
        mate_unmapped = BamFlag.MUNMAP in flags

        self.n_reads[w] += 1

        if BamFlag.SECONDARY in flags:
            self.n_secondary[w] += 1
        elif BamFlag.SUPPLEMENTARY in flags:
            self.n_supp[w] += 1
        else:
            self.n_primary[w] += 1
            if BamFlag.PAIRED in flags:
                self.n_pair_all[w] += 1
                if BamFlag.PROPER_PAIR in flags and not unmapped:
                    self.n_pair_good[w] += 1
                if BamFlag.READ1 in flags:
                    self.n_read1[w] += 1
                if BamFlag.READ2 in flags:
                    self.n_read2[w] += 1
                if mate_unmapped and not unmapped:
                    self.n_sgltn[w] += 1
                if not unmapped and not mate_unmapped:
                    self.n_pair_map[w] += 1
                    if next_ref_id != ref_id:
                        self.n_diffchr[w] += 1
                        if mapq >= 5:
                            self.n_diffhigh[w] += 1
            if not unmapped:
                self.n_pmapped[w] += 1
            if BamFlag.DUP in flags:
                self.n_pdup[w] += 1

        if not unmapped:
            self.n_mapped[w] += 1
        if BamFlag.DUP in flags:
            self.n_dup[w] += 1

    def merge(self, other: "FlagStats") -> "FlagStats":
        """Add the counters of ``other`` into this one and return self."""
        for f in fields(self):
            mine = getattr(self, f.name)
            theirs = getattr(other, f.name)
            mine[0] += theirs[0]
            mine[1] += theirs[1]
        return self

    def __str__(self) -> str:
        def both(pair: list[int]) -> str:
            return f"{pair[0]} + {pair[1]}"

        def pct(num: list[int], den: list[int]) -> str:
            return f"({percent(num[0], den[0])} : {percent(num[1], den[1])})"

        lines = [
            f"{both(self.n_reads)} in total (QC-passed reads + QC-failed reads)",
            f"{both(self.n_primary)} primary",
            f"{both(self.n_secondary)} secondary",
            f"{both(self.n_supp)} supplementary",
            f"{both(self.n_dup)} duplicates",
            f"{both(self.n_pdup)} primary duplicates",
            f"{both(self.n_mapped)} mapped {pct(self.n_mapped, self.n_reads)}",
            f"{both(self.n_pmapped)} primary mapped "
            f"{pct(self.n_pmapped, self.n_primary)}",
            f"{both(self.n_pair_all)} paired in sequencing",
            f"{both(self.n_read1)} read1",
            f"{both(self.n_read2)} read2",
            f"{both(self.n_pair_good)} properly paired "
            f"{pct(self.n_pair_good, self.n_pair_all)}",
            f"{both(self.n_pair_map)} with itself and mate mapped",
            f"{both(self.n_sgltn)} singletons {pct(self.n_sgltn, self.n_pair_all)}",
            f"{both(self.n_diffchr)} with mate mapped to a different chr",
            f"{both(self.n_diffhigh)} with mate mapped to a different chr (mapQ>=5)",
        ]
        return "\n".join(lines)


def flagstat(records: Iterable[tuple[int, int, int, int]]) -> FlagStats:
    """Collect statistics over ``(flag, ref_id, next_ref_id, mapq)`` tuples."""
    stats = FlagStats()
    for flag, ref_id, next_ref_id, mapq in records:
        stats.collect(flag, ref_id, next_ref_id, mapq)
    return stats