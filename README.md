# gbamkit

Building blocks for GBAM, a columnar layout of BAM alignment data. The package
holds the parts that work without a BAM or GBAM file at hand. They operate on
values, byte strings and plain records that you supply.

## Modules

- `gbamkit.cigar`
  - `Op` is one packed CIGAR operation: the length sits in the high 28 bits and
    the kind in the low 4. It provides `length()`, `op_type()`,
    `is_consuming_reference()` and `consumes_read()`.
  - `Cigar` is a list of operations. `Cigar.from_bytes` decodes packed
    little-endian `uint32` values and `to_bytes` encodes them again.
    `read_length()` sums the operations that consume the read, and `str()`
    renders text such as `"5M2I"`.
  - `base_coverage(ops)` gives the number of reference bases the operations
    span.
- `gbamkit.bed`
  - `parse_record` parses one BED line into `(name, start, end)`.
  - `parse_bed` accepts a string, bytes or an open file. It returns a dict that
    maps each reference name to its `(start, end)` pairs, in input order.
  - `parse_bed_file(path)` does the same for a file on disk.
  - `parse_region_query` parses queries such as `chr3:51289-19238568`.
  - Malformed input raises `BedFormatError`, a subclass of `ValueError`.
- `gbamkit.codecs`
  - `compress(data, codec)` and `decompress(data, codec, uncompressed_size)`
    handle one column block.
  - `Codec` lists the supported codecs: `GZIP`, `LZ4` (raw block), `BROTLI`,
    `ZSTD` and `NO_COMPRESSION`. Its values are the names `"Gzip"`, `"Lz4"`,
    `"Brotli"`, `"Zstd"` and `"NoCompression"`, and these names are accepted in
    place of a `Codec`.
  - A block that cannot be decoded raises `CodecError`.
- `gbamkit.blockstats`
  - `Stat` holds the per-block minimum and maximum of an i32 column, with
    `update`, `reset`, `is_reset`, `to_dict` and `from_dict`.
  - `find_leftmost_block(ref_id, stats)` returns the first block whose range
    may contain `ref_id`, or `None` if no block does.
  - `find_rightmost_block(ref_id, stats)` returns the index one past the last
    block whose minimum does not exceed `ref_id`.
  - Both functions expect blocks ordered by reference id.
- `gbamkit.flagstat`
  - `BamFlag` defines the alignment flag bits.
  - `FlagStats` keeps samtools-style counters as `[QC-passed, QC-failed]`
    pairs, with `collect(flag, ref_id, next_ref_id, mapq)` and `merge(other)`.
    `str()` gives the familiar 16-line report.
  - `flagstat(records)` builds a `FlagStats` from
    `(flag, ref_id, next_ref_id, mapq)` tuples.
  - `percent(n, total)` formats a share with two decimals, or returns `N/A` when
    `total` is zero.
- `gbamkit.depth`
  - `DepthUnit` holds the parts of a record that depth needs: `refid`, `pos`,
    the CIGAR's reference coverage in `cigar`, and `flag`.
  - `calc_depth(units, ref_id, ref_len, order=None)` returns the depth at each
    position of one reference. The records must be sorted by reference id,
    optionally through an index `order`.
  - `per_base_lines` yields `chrom\tpos\tdepth` lines for covered positions.
  - `bed_region_lines` yields `chrom\tstart\tend\tdepth` lines for runs of
    equal depth.
  - `write_bed_gz(path, lines)` writes lines to a gzip file and returns how
    many lines it wrote.
  - `chr_name_mapping` maps reference names to their ids.

## Example

```python
from gbamkit.cigar import Cigar
from gbamkit.bed import parse_region_query
from gbamkit.codecs import Codec, compress, decompress
from gbamkit.flagstat import flagstat

cigar = Cigar.from_bytes(bytes.fromhex("50000000"))
print(str(cigar))            # "5M"

print(parse_region_query("chrX:346798-23689090"))
# ('chrX', 346798, 23689090)

data = b"ACGT" * 1000
packed = compress(data, Codec.ZSTD)
assert decompress(packed, Codec.ZSTD, len(data)) == data

print(flagstat([(0, 0, 0, 60), (4, -1, -1, 0)]))
```

## What it does not do

gbamkit does not read or write GBAM or BAM files. It does not convert between
them, and it has no command-line tools. Records, block metadata and coverage
inputs must come from your own code.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```