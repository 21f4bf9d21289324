import pytest

from fuzzyfold.dotbracket import DotBracketVec
from fuzzyfold.errors import (
    InvalidPairTableError,
    InvalidTokenError,
    UnmatchedCloseError,
    UnmatchedOpenError,
)
from fuzzyfold.pair_table import PairTable


def test_valid_pair_table():
    pt = PairTable.from_string("((..))")
    assert len(pt) == 6
    assert pt[0] == 5
    assert pt[1] == 4
    assert pt[2] is None
    assert pt[3] is None
    assert pt[4] == 1
    assert pt[5] == 0


def test_unmatched_open():
    with pytest.raises(UnmatchedOpenError) as info:
        PairTable.from_string("(()")
    assert str(info.value) == "Unmatched '(' at position 0"


def test_unmatched_close():
    with pytest.raises(UnmatchedCloseError) as info:
        PairTable.from_string("())")
    assert str(info.value) == "Unmatched ')' at position 2"


def test_invalid_token():
    with pytest.raises(InvalidTokenError) as info:
        PairTable.from_string("(x)")
    assert str(info.value) == "Invalid character 'x' in structure at position 1"


def test_well_formed_empty_interval():
    pt = PairTable.from_string("...")
    for i, j in [(0, 0), (0, 1), (0, 2), (0, 3), (1, 3), (2, 3), (3, 3)]:
        assert pt.is_well_formed(i, j)


def test_well_formed_pairings_within_interval():
    pt = PairTable.from_string(".(.).")
    assert pt.is_well_formed(0, 5)
    assert pt.is_well_formed(0, 4)
    assert pt.is_well_formed(1, 5)
    assert pt.is_well_formed(1, 4)
    assert pt.is_well_formed(2, 3)
    assert not pt.is_well_formed(0, 3)
    assert not pt.is_well_formed(1, 3)
    assert not pt.is_well_formed(2, 4)


def test_well_formed_out_of_bounds():
    pt = PairTable.from_string("..")
    with pytest.raises(ValueError, match="Invalid interval: j must be <= length"):
        pt.is_well_formed(0, 3)


def test_dot_bracket_vec_from_pair_table():
    pt = PairTable.from_string("((..))")
    assert str(pt.to_dotbracket()) == "((..))"


@pytest.mark.parametrize("text", ["", "....", "((..))", ".(.)((..)).", "(((...)))"])
def test_dotbracket_round_trip(text):
    db = DotBracketVec.from_string(text)
    pt = PairTable.from_dotbracket(db)
    assert pt == PairTable.from_string(text)
    assert pt.to_dotbracket() == db


def test_from_dotbracket_unmatched():
    with pytest.raises(UnmatchedCloseError):
        PairTable.from_dotbracket(DotBracketVec.from_string("())"))
    with pytest.raises(UnmatchedOpenError):
        PairTable.from_dotbracket(DotBracketVec.from_string("(()"))


def test_from_dotbracket_rejects_break():
    with pytest.raises(InvalidTokenError):
        PairTable.from_dotbracket(DotBracketVec.from_string("(.+.)"))


def test_self_pairing_cannot_convert():
    with pytest.raises(InvalidPairTableError) as info:
        PairTable([None, 1]).to_dotbracket()
    assert info.value.position == 1


def test_pair_table_is_symmetric():
    pt = PairTable.from_string(".((..)(...)).")
    for i, j in enumerate(pt):
        if j is not None:
            assert pt[j] == i