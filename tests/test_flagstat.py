import pytest

from gbamkit.flagstat import BamFlag, FlagStats, flagstat, percent


def test_percent_zero_total_is_na():
    assert percent(0, 0) == "N/A"
    assert percent(5, 0) == "N/A"


def test_percent_half():
    assert percent(1, 2) == "50.00%"


def test_empty_stats_text():
    text = str(FlagStats())
    lines = text.split("\n")
    assert len(lines) == 16
    assert lines[0] == "0 + 0 in total (QC-passed reads + QC-failed reads)"
    assert lines[6] == "0 + 0 mapped (N/A : N/A)"
    assert lines[-1] == "0 + 0 with mate mapped to a different chr (mapQ>=5)"
    assert not text.endswith("\n")


def test_primary_mapped_read():
    stats = FlagStats()
    stats.collect(0, 0, 0, 60)
    assert stats.n_reads == [1, 0]
    assert stats.n_primary == [1, 0]
    assert stats.n_mapped == [1, 0]
    assert stats.n_pmapped == [1, 0]
    assert stats.n_pair_all == [0, 0]


def test_qcfail_goes_to_second_slot():
    stats = FlagStats()
    stats.collect(int(BamFlag.QCFAIL), 0, 0, 60)
    assert stats.n_reads == [0, 1]
    assert stats.n_mapped == [0, 1]


def test_secondary_and_supplementary_are_not_primary():
    stats = flagstat(
        [
            (int(BamFlag.SECONDARY | BamFlag.DUP), 0, 0, 60),
            (int(BamFlag.SUPPLEMENTARY), 0, 0, 60),
        ]
    )
    assert stats.n_secondary == [1, 0]
    assert stats.n_supp == [1, 0]
    assert stats.n_primary == [0, 0]
    assert stats.n_dup == [1, 0]
    assert stats.n_pdup == [0, 0]
    assert stats.n_mapped == [2, 0]


def test_unmapped_read_not_counted_as_mapped():
    stats = FlagStats()
    stats.collect(int(BamFlag.UNMAP), -1, -1, 0)
    assert stats.n_mapped == [0, 0]
    assert stats.n_pmapped == [0, 0]
    assert stats.n_reads == [1, 0]


def test_properly_paired_read1():
    flag = BamFlag.PAIRED | BamFlag.PROPER_PAIR | BamFlag.READ1
    stats = FlagStats()
    stats.collect(int(flag), 2, 2, 30)
    assert stats.n_pair_all == [1, 0]
    assert stats.n_pair_good == [1, 0]
    assert stats.n_read1 == [1, 0]
    assert stats.n_read2 == [0, 0]
    assert stats.n_pair_map == [1, 0]
    assert stats.n_diffchr == [0, 0]


def test_singleton():
    flag = BamFlag.PAIRED | BamFlag.MUNMAP | BamFlag.READ2
    stats = FlagStats()
    stats.collect(int(flag), 1, -1, 30)
    assert stats.n_sgltn == [1, 0]
    assert stats.n_pair_map == [0, 0]
    assert stats.n_read2 == [1, 0]


@pytest.mark.parametrize("mapq, high", [(5, 1), (4, 0)])
def test_mate_on_different_chromosome(mapq, high):
    stats = FlagStats()
    stats.collect(int(BamFlag.PAIRED), 1, 3, mapq)
    assert stats.n_diffchr == [1, 0]
    assert stats.n_diffhigh == [high, 0]


def test_merge_matches_single_pass():
    records = [
        (0, 0, 0, 60),
        (int(BamFlag.QCFAIL | BamFlag.UNMAP), -1, -1, 0),
        (int(BamFlag.PAIRED | BamFlag.READ1), 0, 1, 20),
        (int(BamFlag.SECONDARY), 0, 0, 1),
        (int(BamFlag.PAIRED | BamFlag.MUNMAP | BamFlag.DUP), 2, -1, 9),
    ]
    combined = flagstat(records)
    left = flagstat(records[:2])
    right = flagstat(records[2:])
    merged = left.merge(right)
    assert merged is left
    assert merged == combined
    assert str(merged) == str(combined)


def test_total_line_reflects_counts():
    stats = flagstat([(0, 0, 0, 60), (int(BamFlag.QCFAIL), 0, 0, 60)])
    first = str(stats).split("\n")[0]
    assert first == "1 + 1 in total (QC-passed reads + QC-failed reads)"


@pytest.mark.parametrize("flag", [4096, -1, 0x10000])
def test_invalid_flag_rejected(flag):
    with pytest.raises(ValueError):
        FlagStats().collect(flag, 0, 0, 0)