import pytest

from zonealloc.flags import (
    HDR_AVAILABLE,
    HDR_POS,
    HDR_POS_FIRST,
    HDR_POS_LAST,
    HDR_TYPE,
    HDR_TYPE_LARGE,
    HDR_TYPE_SMALL,
    HDR_TYPE_TINY,
    HDR_UNAVAILABLE,
    RES_LARGE,
    RES_SMALL,
    RES_TINY,
    align_size,
    flag_set_availability,
    flag_set_pos,
    flag_set_type,
)


def test_flag_set_pos_keeps_other_bits():
    flag = HDR_TYPE_TINY | HDR_AVAILABLE
    assert flag_set_pos(flag, HDR_POS_FIRST) == HDR_TYPE_TINY | HDR_AVAILABLE | HDR_POS_FIRST


def test_flag_set_pos_clears_position():
    flag = HDR_TYPE_SMALL | HDR_POS_FIRST | HDR_POS_LAST
    assert flag_set_pos(flag, 0) == HDR_TYPE_SMALL


def test_flag_set_pos_ignores_foreign_bits_of_option():
    flag = HDR_TYPE_TINY
    assert flag_set_pos(flag, HDR_POS_LAST | HDR_TYPE_LARGE) == HDR_TYPE_TINY | HDR_POS_LAST


def test_flag_set_type_replaces_type():
    flag = HDR_TYPE_TINY | HDR_AVAILABLE | HDR_POS_FIRST
    result = flag_set_type(flag, HDR_TYPE_LARGE)
    assert result & HDR_TYPE == HDR_TYPE_LARGE
    assert result & ~HDR_TYPE == HDR_AVAILABLE | HDR_POS_FIRST


def test_availability_round_trip():
    flag = HDR_TYPE_SMALL | HDR_POS
    available = flag_set_availability(flag, HDR_AVAILABLE)
    assert available & HDR_AVAILABLE
    assert flag_set_availability(available, HDR_UNAVAILABLE) == flag


@pytest.mark.parametrize("flag", range(256))
def test_results_fit_in_a_byte(flag):
    for setter in (flag_set_pos, flag_set_type, flag_set_availability):
        assert 0 <= setter(flag, 0xFF) <= 0xFF
        assert 0 <= setter(flag, 0) <= 0xFF


def test_align_tiny_pinned():
    assert align_size(HDR_TYPE_TINY, 1) == RES_TINY
    assert align_size(HDR_TYPE_TINY, RES_TINY) == RES_TINY
    assert align_size(HDR_TYPE_TINY, RES_TINY + 1) == 2 * RES_TINY


def test_align_small_and_large_pinned():
    assert align_size(HDR_TYPE_SMALL, RES_SMALL + 1) == 2 * RES_SMALL
    assert align_size(HDR_TYPE_LARGE, RES_LARGE) == RES_LARGE


def test_align_zero_wraps_to_zero():
    assert align_size(HDR_TYPE_TINY, 0) == 0


@pytest.mark.parametrize(
    "flag,resolution",
    [(HDR_TYPE_TINY, RES_TINY), (HDR_TYPE_SMALL, RES_SMALL), (HDR_TYPE_LARGE, RES_LARGE)],
)
@pytest.mark.parametrize("size", [1, 7, 15, 16, 17, 100, 511, 512, 513, 4095, 4097, 1 << 20])
def test_align_invariants(flag, resolution, size):
    aligned = align_size(flag, size)
    assert aligned % resolution == 0
    assert size <= aligned < size + resolution