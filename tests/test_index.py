import logging

from mac_oui.blocks import decode_block
from mac_oui.index import ManufacturerIndex, RangeIndex
from mac_oui.models import BlockSize, Record


def rec(oui: str, name: str, size: BlockSize = BlockSize.LARGE) -> Record:
    return Record(
        block_notation=oui,
        is_private=False,
        organization_name=name,
        organization_address="",
        country_code="US",
        block_size_class=size,
        date_created="2014-07-15",
        date_updated="2015-09-13",
    )


def build(*records: Record) -> RangeIndex:
    return RangeIndex((decode_block(r.block_notation), r) for r in records)


def test_point_query_finds_owner():
    idx = build(rec("70:B3:D5", "Ieee"), rec("00:03:93", "Apple"))
    assert len(idx) == 2
    assert idx.get(0x70B3D5E74F81).organization_name == "Ieee"
    assert idx.get(0x000393000000).organization_name == "Apple"
    assert idx.get(0x000393FFFFFF).organization_name == "Apple"
    assert 0x70B3D5000000 in idx


def test_point_query_outside_all_ranges():
    idx = build(rec("70:B3:D5", "Ieee"))
    assert idx.get(0x70B3D6000000) is None
    assert idx.get(0x70B3D4FFFFFF) is None
    assert 0x000000000000 not in idx
    assert RangeIndex().get(0) is None


def test_most_specific_block_wins_regardless_of_order():
    coarse = rec("70:B3:D5", "Ieee")
    fine = rec("70:B3:D5:F2:F0:00/36", "Small Co", BlockSize.SMALL)

    for idx in (build(coarse, fine), build(fine, coarse)):
        assert idx.get(0x70B3D5F2F123) is fine
        assert idx.get(0x70B3D5F30000) is coarse


def test_equal_blocks_prefer_last_inserted():
    first = rec("00:03:93", "Old Name")
    second = rec("00:03:93", "New Name")
    idx = build(first, second)
    assert idx.get(0x000393123456) is second
    assert [e.record for e in idx.find_all(0x000393123456)] == [first, second]


def test_find_all_in_insertion_order():
    a = rec("0A:00:00:00:00:00/8", "Enterprise")
    b = rec("0A:0B:0C", "Mid")
    c = rec("0A:0B:0C:0D:00:00/40", "Fine")
    idx = build(c, a, b)
    assert [e.record for e in idx.find_all(0x0A0B0C0D0001)] == [c, a, b]
    assert idx.get(0x0A0B0C0D0001) is c


def test_many_overlaps_warn_but_still_answer(caplog):
    a = rec("0A:00:00:00:00:00/8", "Enterprise")
    b = rec("0A:0B:0C", "Mid")
    c = rec("0A:0B:0C:0D:00:00/40", "Fine")
    idx = build(a, b, c)

    with caplog.at_level(logging.WARNING, logger="mac_oui.index"):
        assert idx.get(0x0A0B0C0D0001) is c
    assert "3 overlapping blocks" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="mac_oui.index"):
        assert idx.get(0x0A0B0C000001) is b
    assert caplog.text == ""


def test_manufacturer_index_keeps_table_order():
    a1 = rec("00:03:93", "Apple, Inc.")
    g = rec("00:1A:11", "Google Inc.")
    a2 = rec("00:1B:63", "Apple, Inc.")
    idx = ManufacturerIndex([a1, g, a2])

    assert idx.get("Apple, Inc.") == (a1, a2)
    assert idx.get("apple, inc.") is None
    assert "Google Inc." in idx
    assert len(idx) == 2
    assert idx.names() == frozenset({"Apple, Inc.", "Google Inc."})


def test_unaligned_block_found_at_both_ends():
    r = rec("70:B3:D5:20/28", "Unaligned", BlockSize.MEDIUM)
    idx = build(rec("00:03:93", "Apple"), r)
    assert idx.get(0x70B3D520) is r
    assert idx.get(0x70BFFFFF) is r
    assert idx.get(0x70B3D51F) is None
    assert idx.get(0x70C00000) is None
