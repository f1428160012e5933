"""Tests for acceptance rules."""

from erddap_feeder.ais.acceptance import AcceptanceRule, AcceptanceTable
from erddap_feeder.ais.models import MessageIdentifier


def test_exact_match():
    rule = AcceptanceRule(MessageIdentifier(8, 200, 31))
    table = AcceptanceTable([rule])

    assert table.lookup(MessageIdentifier(8, 200, 31)) is rule


def test_none_does_not_match_value():
    table = AcceptanceTable([AcceptanceRule(MessageIdentifier(8, 200, 31))])

    assert table.lookup(MessageIdentifier(8)) is None
    assert table.lookup(MessageIdentifier(8, 200)) is None
    assert table.lookup(MessageIdentifier(8, 1, 31)) is None


def test_rule_without_dac_fid_matches_only_bare_type():
    table = AcceptanceTable([AcceptanceRule(MessageIdentifier(8))])

    assert table.lookup(MessageIdentifier(8)) is not None
    assert table.lookup(MessageIdentifier(8, 1, 31)) is None


def test_duplicate_identifier_last_wins(caplog):
    first = AcceptanceRule(MessageIdentifier(8, 1, 31), frozenset({1}))
    second = AcceptanceRule(MessageIdentifier(8, 1, 31), frozenset({2}))

    table = AcceptanceTable([first, second])

    assert len(table) == 1
    assert table.lookup(MessageIdentifier(8, 1, 31)) is second
    assert "Duplicate acceptance rule" in caplog.text


def test_is_excluded():
    rule = AcceptanceRule(MessageIdentifier(8, 1, 31), frozenset({111}))

    assert AcceptanceTable.is_excluded(rule, 111)
    assert not AcceptanceTable.is_excluded(rule, 222)


def test_from_dict():
    rule = AcceptanceRule.from_dict({"type": 8, "dac": 1, "fid": 31, "ignore_mmsi": [111, 222]})
    assert rule.identifier == MessageIdentifier(8, 1, 31)
    assert rule.ignore_mmsi == frozenset({111, 222})

    bare = AcceptanceRule.from_dict({"type": 8})
    assert bare.identifier == MessageIdentifier(8, None, None)
    assert bare.ignore_mmsi == frozenset()
