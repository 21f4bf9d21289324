import pytest

from fuzzyfold.errors import InvalidTokenError, UnmatchedOpenError
from fuzzyfold.loop_table import LoopTable, Paired, Unpaired
from fuzzyfold.pair_table import PairTable


def test_loop_table_valid_structure():
    lt = LoopTable.from_pair_table(PairTable.from_string("((..))"))
    expected = [
        Paired(0, 1),
        Paired(1, 2),
        Unpaired(2),
        Unpaired(2),
        Paired(1, 2),
        Paired(0, 1),
    ]
    assert list(lt) == expected


def test_loop_table_unpaired_structure():
    lt = LoopTable.from_pair_table(PairTable.from_string("......"))
    assert len(lt) == 6
    assert all(isinstance(info, Unpaired) for info in lt)


def test_loop_table_self_pairing_fails():
    with pytest.raises(InvalidTokenError):
        LoopTable.from_pair_table(PairTable([0]))


def test_loop_table_unmatched_open_detected():
    pt = PairTable([5, 4, None, None, 1, None])
    with pytest.raises(UnmatchedOpenError) as info:
        LoopTable.from_pair_table(pt)
    assert info.value.position == 5


def test_loop_table_len_indexing():
    lt = LoopTable.from_pair_table(PairTable.from_string("((..))"))
    assert len(lt) == 6
    assert isinstance(lt[2], Unpaired)


def test_pair_table_to_loop_index_01():
    pt = PairTable.from_string(".(((...)).((...))..(.(...)))")
    expected = [
        Unpaired(0),
        Paired(0, 1), Paired(1, 2), Paired(2, 3),
        Unpaired(3), Unpaired(3), Unpaired(3),
        Paired(2, 3), Paired(1, 2),
        Unpaired(1),
        Paired(1, 4), Paired(4, 5),
        Unpaired(5), Unpaired(5), Unpaired(5),
        Paired(4, 5), Paired(1, 4),
        Unpaired(1), Unpaired(1),
        Paired(1, 6),
        Unpaired(6),
        Paired(6, 7),
        Unpaired(7), Unpaired(7), Unpaired(7),
        Paired(6, 7), Paired(1, 6), Paired(0, 1),
    ]
    assert LoopTable.from_pair_table(pt) == expected


def test_pair_table_to_loop_index_02():
    pt = PairTable.from_string(".(((...)(...).((.(...))).)).")
    expected = [
        Unpaired(0),
        Paired(0, 1),
        Paired(1, 2),
        Paired(2, 3),
        Unpaired(3),
        Unpaired(3),
        Unpaired(3),
        Paired(2, 3),
        Paired(2, 4),
        Unpaired(4),
        Unpaired(4),
        Unpaired(4),
        Paired(2, 4),
        Unpaired(2),
        Paired(2, 5),
        Paired(5, 6),
        Unpaired(6),
        Paired(6, 7),
        Unpaired(7),
        Unpaired(7),
        Unpaired(7),
        Paired(6, 7),
        Paired(5, 6),
        Paired(2, 5),
        Unpaired(2),
        Paired(1, 2),
        Paired(0, 1),
        Unpaired(0),
    ]
    assert LoopTable.from_pair_table(pt) == expected


def test_pair_table_to_loop_index_03():
    pt = PairTable.from_string(".(((...)(...))).((((.(...))).)).")
    expected = [
        Unpaired(0),
        Paired(0, 1), Paired(1, 2), Paired(2, 3),
        Unpaired(3), Unpaired(3), Unpaired(3),
        Paired(2, 3), Paired(2, 4),
        Unpaired(4), Unpaired(4), Unpaired(4),
        Paired(2, 4), Paired(1, 2), Paired(0, 1),
        Unpaired(0),
        Paired(0, 5), Paired(5, 6), Paired(6, 7), Paired(7, 8),
        Unpaired(8),
        Paired(8, 9),
        Unpaired(9), Unpaired(9), Unpaired(9),
        Paired(8, 9), Paired(7, 8), Paired(6, 7),
        Unpaired(6), Paired(5, 6), Paired(0, 5),
        Unpaired(0),
    ]
    assert LoopTable.from_pair_table(pt) == expected


def test_loop_table_display():
    lt = LoopTable([
        Unpaired(0),
        Paired(0, 1),
        Paired(1, 2),
        Unpaired(2),
        Paired(1, 2),
        Paired(0, 1),
    ])
    assert str(lt) == "[0, 0/1, 1/2, 2, 1/2, 0/1]"