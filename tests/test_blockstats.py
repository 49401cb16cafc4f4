import pytest

from gbamkit.blockstats import (
    I32_MAX,
    I32_MIN,
    Stat,
    find_leftmost_block,
    find_rightmost_block,
)


def _sorted_blocks(values_per_block):
    blocks = []
    for values in values_per_block:
        stat = Stat()
        for v in values:
            stat.update(v)
        blocks.append(stat)
    return blocks


BLOCKS = _sorted_blocks([[0, 0, 0], [0, 1], [1, 1, 2], [4, 4], [4, 6, 7]])


def test_default_is_reset():
    stat = Stat()
    assert stat.is_reset()
    assert stat.min_value == I32_MAX
    assert stat.max_value == I32_MIN


def test_update_tracks_range():
    stat = Stat()
    for v in [5, -3, 12, 7]:
        stat.update(v)
    assert (stat.min_value, stat.max_value) == (-3, 12)
    assert not stat.is_reset()


def test_reset_returns_to_empty():
    stat = Stat()
    stat.update(9)
    stat.reset()
    assert stat.is_reset()


def test_dict_round_trip():
    stat = Stat()
    stat.update(-4)
    stat.update(20)
    assert Stat.from_dict(stat.to_dict()) == stat


@pytest.mark.parametrize("ref_id", [0, 1, 2, 4, 6, 7])
def test_leftmost_block_is_first_containing(ref_id):
    index = find_leftmost_block(ref_id, BLOCKS)
    assert BLOCKS[index].min_value <= ref_id <= BLOCKS[index].max_value
    assert all(b.max_value < ref_id for b in BLOCKS[:index])


@pytest.mark.parametrize("ref_id", [-1, 3, 8])
def test_leftmost_block_absent(ref_id):
    assert find_leftmost_block(ref_id, BLOCKS) is None


def test_leftmost_block_empty_list():
    assert find_leftmost_block(0, []) is None


@pytest.mark.parametrize("ref_id", [-1, 0, 1, 2, 3, 4, 7, 8])
def test_rightmost_block_bound(ref_id):
    index = find_rightmost_block(ref_id, BLOCKS)
    assert all(b.min_value <= ref_id for b in BLOCKS[:index])
    assert all(b.min_value > ref_id for b in BLOCKS[index:])


@pytest.mark.parametrize("ref_id", [0, 1, 2, 4, 6, 7])
def test_block_range_covers_all_matches(ref_id):
    left = find_leftmost_block(ref_id, BLOCKS)
    right = find_rightmost_block(ref_id, BLOCKS)
    assert left < right
    matching = [i for i, b in enumerate(BLOCKS) if b.min_value <= ref_id <= b.max_value]
    assert set(matching) <= set(range(left, right))