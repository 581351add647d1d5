import json

import pytest

from golf_pool.core import PAYMENTS_FILE, PICKS_FILE
from golf_pool.services.picks import (
    PaymentRoster,
    PickRegistry,
    PickRegistryError,
    validate_entry,
)

FIVE = ["Scottie Scheffler", "Rory McIlroy", "Jon Rahm", "Ludvig Aberg", "Xander Schauffele"]


def test_validate_entry_strips_and_parses_tiebreakers():
    entry = validate_entry(" Alice ", [f" {name} " for name in FIVE], ["281", 139])

    assert entry.name == "Alice"
    assert entry.picks == FIVE
    assert (entry.tiebreaker1, entry.tiebreaker2) == (281, 139)


def test_four_picks_are_accepted_and_tiebreakers_are_optional():
    entry = validate_entry("Bob", FIVE[:4])

    assert len(entry.picks) == 4
    assert entry.tiebreaker1 is None and entry.tiebreaker2 is None


@pytest.mark.parametrize(
    "picks",
    [FIVE[:3], FIVE + ["Tony Finau"], FIVE[:4] + [FIVE[0]]],
)
def test_invalid_pick_lists_are_rejected(picks):
    with pytest.raises(PickRegistryError):
        validate_entry("Carol", picks)


def test_bad_tiebreaker_is_rejected():
    with pytest.raises(PickRegistryError):
        validate_entry("Dave", FIVE, ["two-eighty"])


def test_duplicate_participants_are_rejected():
    with pytest.raises(PickRegistryError):
        PickRegistry([validate_entry("Alice", FIVE), validate_entry("Alice", FIVE)])


def test_from_mapping_keeps_load_order():
    registry = PickRegistry.from_mapping(
        {
            "Zed": {"picks": FIVE, "tiebreakers": [280, 140]},
            "Amy": {"picks": FIVE[:4]},
        }
    )

    assert [entry.name for entry in registry.entries()] == ["Zed", "Amy"]
    assert len(registry) == 2


def test_from_mapping_rejects_other_shapes():
    with pytest.raises(PickRegistryError):
        PickRegistry.from_mapping(["not", "a", "mapping"])
    with pytest.raises(PickRegistryError):
        PickRegistry.from_mapping({"Alice": FIVE})


def test_from_file(tmp_path):
    path = tmp_path / "picks.json"
    path.write_text(json.dumps({"Alice": {"picks": FIVE, "tiebreakers": [275, 150]}}))

    registry = PickRegistry.from_file(path)

    assert registry.entries()[0].tiebreaker1 == 275


def test_from_file_reports_unreadable_tables(tmp_path):
    with pytest.raises(PickRegistryError):
        PickRegistry.from_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{")
    with pytest.raises(PickRegistryError):
        PickRegistry.from_file(broken)


def test_from_sheet_rows():
    registry = PickRegistry.from_sheet_rows(
        [
            ["Name", "Pick 1", "Pick 2", "Pick 3", "Pick 4", "Pick 5", "Tiebreaker 1", "Tiebreaker 2"],
            ["Alice", *FIVE, "279", "141"],
            ["", "", "", "", "", "", "", ""],
            ["Bob", *FIVE[:4]],
        ]
    )

    alice, bob = registry.entries()
    assert alice.tiebreaker2 == 141
    assert bob.picks == FIVE[:4]


def test_bundled_sample_tables_load():
    registry = PickRegistry.from_file(PICKS_FILE)
    roster = PaymentRoster.from_file(PAYMENTS_FILE)

    assert len(registry) > 0
    assert all(4 <= len(entry.picks) <= 5 for entry in registry.entries())
    assert set(roster.as_dict()) <= {entry.name for entry in registry.entries()}


def test_payment_roster_accepts_loose_truthy_values():
    roster = PaymentRoster.from_mapping({"Alice": True, "Bob": "yes", "Carol": "no", "Dave": False})

    assert roster.is_paid("Alice")
    assert roster.is_paid("Bob")
    assert not roster.is_paid("Carol")
    assert not roster.is_paid("Dave")
    assert not roster.is_paid("Nobody")


def test_missing_payment_roster_means_nobody_paid(tmp_path):
    roster = PaymentRoster.from_file(tmp_path / "payments.json")

    assert roster.as_dict() == {}
