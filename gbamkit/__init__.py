"""GBAM building blocks: CIGARs, BED regions, block codecs, block statistics, flagstat and depth."""

__version__ = "0.1.0"
__all__ = ["bed", "blockstats", "cigar", "codecs", "depth", "flagstat"]