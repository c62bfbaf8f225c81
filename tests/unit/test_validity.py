"""Unit tests for the initial/final validity table."""

from __future__ import annotations

import pytest

from pinyin_norm.phonology.tables import Final, Initial
from pinyin_norm.phonology.validity import (
    LEGAL_COMBINATIONS,
    is_legal,
    legal_finals,
    legal_syllable_count,
)


def test_empty_initial_combines_with_every_final() -> None:
    assert legal_finals(Initial.EMPTY) == frozenset(Final)


def test_irregular_combinations() -> None:
    assert is_legal(Initial.L, Final.O)
    assert not is_legal(Initial.B, Final.O)
    assert is_legal(Initial.R, Final.UA)
    assert not is_legal(Initial.R, Final.UAI)
    assert is_legal(Initial.M, Final.IU)
    assert not is_legal(Initial.B, Final.IU)
    assert is_legal(Initial.B, Final.IANG)
    assert not is_legal(Initial.C, Final.EI)


def test_labials_reject_most_glide_finals() -> None:
    assert not is_legal(Initial.F, Final.AI)
    assert not is_legal(Initial.F, Final.I)
    assert not is_legal(Initial.P, Final.UA)
    assert not is_legal(Initial.M, Final.V)


def test_palatals_only_take_front_finals() -> None:
    for initial in (Initial.J, Initial.Q, Initial.X):
        assert is_legal(initial, Final.V)
        assert is_legal(initial, Final.IONG)
        assert not is_legal(initial, Final.U)
        assert not is_legal(initial, Final.A)
        assert not is_legal(initial, Final.ONG)


def test_sibilants_take_syllabic_i_but_not_glide_finals() -> None:
    for initial in (Initial.ZH, Initial.CH, Initial.SH, Initial.R, Initial.Z, Initial.C, Initial.S):
        assert is_legal(initial, Final.I)
        assert not is_legal(initial, Final.IA)
        assert not is_legal(initial, Final.V)


def test_table_is_read_only_and_complete() -> None:
    assert set(LEGAL_COMBINATIONS) == set(Initial)
    assert legal_syllable_count() == sum(len(finals) for finals in LEGAL_COMBINATIONS.values())
    with pytest.raises(TypeError):
        LEGAL_COMBINATIONS[Initial.B] = frozenset()  # type: ignore[index]
