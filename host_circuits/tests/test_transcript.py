"""Tests for the Fiat-Shamir transcript."""

from host_circuits.primitives.field import FF
from host_circuits.primitives.transcript import Transcript


def test_same_input_same_challenge() -> None:
    a = Transcript()
    b = Transcript()
    a.put([1, 2, 3])
    b.put([1, 2, 3])
    assert a.get_field() == b.get_field()


def test_successive_challenges_differ() -> None:
    t = Transcript()
    t.put([42])
    assert t.get_field() != t.get_field()


def test_absorbed_data_changes_challenge() -> None:
    a = Transcript()
    b = Transcript()
    a.put([1, 2, 3])
    b.put([1, 2, 4])
    assert a.get_field() != b.get_field()


def test_domain_separation() -> None:
    assert Transcript(b"a").get_field() != Transcript(b"b").get_field()


def test_challenge_is_field_element() -> None:
    assert isinstance(Transcript().get_field(), FF)
