"""Integration tests for the galactic war history."""

import shutil
import tempfile
from pathlib import Path

import pytest

from linked_registry import GalaxyHistory, RegistryConfig
from linked_registry.components.bitstatus import FleetStatus, MaskOp
from linked_registry.core.errors import (
    AllocationFailureError,
    DuplicateReferenceError,
    FileCorruptedError,
    NotFoundError,
)
from linked_registry.persistence import load_galactic_history, save_galactic_history

HISTORY = """\
BATTLE:Battle of Yavin
DATE:19770525
FLEET:Red Squadron|R1|12|Ready for Jump, Shield Active
FLEET:Gold Squadron|G1|8|Critical Damage

BATTLE:Battle of Hoth
DATE:19800521
FLEET:Rogue Squadron|R2|10|Withdrawal
BATTLE:Battle of Yavin
DATE:19770525
FLEET:Blue Squadron|B1|6|
"""


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def history(temp_dir):
    path = temp_dir / "galactic_data.txt"
    path.write_text(HISTORY, encoding="utf-8")
    hist = GalaxyHistory(RegistryConfig(fsync_on_save=False))
    load_galactic_history(hist, path)
    return hist


def fleet_names(hist, name, date):
    return [f.key.name for f in hist.fleets_in(hist.find_battle(name, date))]


def test_load_orders_battles(history):
    assert history.total_battles == 2
    assert [b.key.name for b in history.battles()] == ["Battle of Hoth", "Battle of Yavin"]


def test_repeated_battle_continues(history):
    assert fleet_names(history, "Battle of Yavin", 19770525) == [
        "Red Squadron",
        "Gold Squadron",
        "Blue Squadron",
    ]


def test_status_text_scanned_into_bits(history):
    yavin = history.find_battle("Battle of Yavin")
    red = history.find_fleet(yavin, "red squadron")
    assert red.size == 12
    assert red.label == "R1"
    assert red.flags == FleetStatus.READY_FOR_JUMP | FleetStatus.SHIELD_ACTIVE
    assert history.find_fleet(yavin, "Blue Squadron").flags == 0


def test_same_name_other_date_is_a_new_battle(history):
    battle = history.open_battle("Battle of Yavin", 19840101)
    assert history.total_battles == 3
    assert len(battle.references) == 0
    assert history.find_battle("battle of yavin").key.date == 19770525


def test_fleet_in_two_battles_keeps_each_report(history):
    yavin = history.find_battle("Battle of Yavin", 19770525)
    hoth = history.find_battle("Battle of Hoth", 19800521)
    history.report_fleet(hoth, "Red Squadron", 9, FleetStatus.CRITICAL_DAMAGE, "R9")

    at_yavin = history.find_fleet(yavin, "Red Squadron")
    at_hoth = history.find_fleet(hoth, "Red Squadron")
    assert (at_yavin.size, at_yavin.flags, at_yavin.label) == (
        12,
        FleetStatus.READY_FOR_JUMP | FleetStatus.SHIELD_ACTIVE,
        "R1",
    )
    assert (at_hoth.size, at_hoth.flags, at_hoth.label) == (9, FleetStatus.CRITICAL_DAMAGE, "R9")
    assert history.count_fleets_with_status_bits(FleetStatus.READY_FOR_JUMP) == 1
    assert history.count_fleets_with_status_bits(FleetStatus.CRITICAL_DAMAGE) == 2

    with pytest.raises(DuplicateReferenceError):
        history.report_fleet(hoth, "red squadron", 1, 0)
    assert history.find_fleet(hoth, "Red Squadron").size == 9


def test_fleet_in_two_battles_round_trip_and_modify(temp_dir, history):
    hoth = history.find_battle("Battle of Hoth", 19800521)
    history.report_fleet(hoth, "Red Squadron", 9, FleetStatus.CRITICAL_DAMAGE, "R9")

    out = temp_dir / "saved.txt"
    save_galactic_history(history, out)
    saved = out.read_text(encoding="utf-8")
    assert "FLEET:Red Squadron|R9|9|Critical Damage\n" in saved
    assert "FLEET:Red Squadron|R1|12|Ready for Jump, Shield Active\n" in saved

    reloaded = GalaxyHistory()
    load_galactic_history(reloaded, out)
    assert [(f.key, f.size, f.flags, f.label) for f in reloaded.fleets()] == [
        (f.key, f.size, f.flags, f.label) for f in history.fleets()
    ]

    modified = reloaded.modify_fleet_statuses_in_battle("Battle of Hoth", MaskOp.CLEAR, FleetStatus.CRITICAL_DAMAGE)
    assert modified == 1
    assert reloaded.find_fleet(reloaded.find_battle("Battle of Hoth"), "Red Squadron").flags == 0
    assert reloaded.find_fleet(reloaded.find_battle("Battle of Yavin"), "Red Squadron").flags == (
        FleetStatus.READY_FOR_JUMP | FleetStatus.SHIELD_ACTIVE
    )


def test_report_fleet_on_full_battle_changes_nothing():
    hist = GalaxyHistory(RegistryConfig(max_references_per_owner=1))
    endor = hist.open_battle("Battle of Endor", 19830525)
    hist.report_fleet(endor, "Red Squadron", 12, 0, "R1")

    with pytest.raises(AllocationFailureError):
        hist.report_fleet(endor, "Gold Squadron", 8, 0, "G1")

    assert [f.key.name for f in hist.fleets()] == ["Red Squadron"]
    assert endor.references.targets() == [hist.find_fleet(endor, "Red Squadron").key]
    with pytest.raises(NotFoundError):
        hist.find_fleet(endor, "Gold Squadron")


def test_count_fleets_with_status_bits(history):
    assert history.count_fleets_with_status_bits(FleetStatus.READY_FOR_JUMP) == 1
    assert history.count_fleets_with_status_bits(FleetStatus.CRITICAL_DAMAGE | FleetStatus.WITHDRAWAL) == 2
    assert history.count_fleets_with_status_bits(0) == 0


def test_modify_fleet_statuses_in_battle(history):
    modified = history.modify_fleet_statuses_in_battle("Battle of Yavin", MaskOp.SET, FleetStatus.WITHDRAWAL)
    assert modified == 3
    assert history.count_fleets_with_status_bits(FleetStatus.WITHDRAWAL) == 4

    # Only Gold Squadron carries CRITICAL_DAMAGE
    modified = history.modify_fleet_statuses_in_battle("battle of yavin", MaskOp.CLEAR, FleetStatus.CRITICAL_DAMAGE)
    assert modified == 1

    modified = history.modify_fleet_statuses_in_battle("Battle of Hoth", MaskOp.TOGGLE, FleetStatus.WITHDRAWAL)
    assert modified == 1
    assert history.find_fleet(history.find_battle("Battle of Hoth"), "Rogue Squadron").flags == 0


def test_modify_unknown_battle(history):
    with pytest.raises(NotFoundError):
        history.modify_fleet_statuses_in_battle("Battle of Endor", MaskOp.SET, 1)


def test_delete_fleet_removes_it_from_every_battle(history):
    hoth = history.find_battle("Battle of Hoth", 19800521)
    history.report_fleet(hoth, "Gold Squadron", 8, 0, "G1")

    deleted = history.delete_fleet("gold squadron")

    assert len(deleted) == 2
    assert fleet_names(history, "Battle of Yavin", 19770525) == ["Red Squadron", "Blue Squadron"]
    assert fleet_names(history, "Battle of Hoth", 19800521) == ["Rogue Squadron"]
    assert list(history.registry.dangling_references()) == []

    with pytest.raises(NotFoundError):
        history.delete_fleet("Gold Squadron")


def test_delete_fleet_from_one_battle(history):
    yavin = history.find_battle("Battle of Yavin", 19770525)
    hoth = history.find_battle("Battle of Hoth", 19800521)
    history.report_fleet(hoth, "Gold Squadron", 8, 0, "G1")

    history.delete_fleet("Gold Squadron", yavin)

    assert fleet_names(history, "Battle of Yavin", 19770525) == ["Red Squadron", "Blue Squadron"]
    assert fleet_names(history, "Battle of Hoth", 19800521) == ["Rogue Squadron", "Gold Squadron"]


def test_delete_battle_drops_its_fleet_reports(history):
    history.delete_battle("Battle of Hoth", 19800521)

    assert history.total_battles == 1
    assert [f.key.name for f in history.fleets()] == ["Blue Squadron", "Gold Squadron", "Red Squadron"]
    assert list(history.registry.dangling_references()) == []


@pytest.mark.parametrize(
    "text",
    [
        "BATTLE:Endor\nBATTLE:Yavin\nDATE:1\n",  # battle with no date of its own
        "BATTLE:Yavin\nFLEET:Red|R|1|\n",  # battle without date
        "BATTLE:Yavin\nBATTLE:Hoth\nDATE:1\n",  # two battles, one date
        "DATE:19770525\n",  # date without battle
        "BATTLE:Yavin\nDATE:tomorrow\n",  # bad date
        "BATTLE:Yavin\nDATE:1\nFLEET:Red|R|70000|\n",  # ships beyond uint16
        "BATTLE:Yavin\nDATE:1\nFLEET:Red|R|12\n",  # missing status column
        "BATTLE:Yavin\nDATE:1\nFLEET:Red|R|1|\nFLEET:red|R|2|\n",  # fleet twice in one battle
        "BATTLE:Yavin\nDATE:1\nSQUADRON:Red\n",  # unknown prefix
        "BATTLE:Yavin\n",  # battle without date at end of file
    ],
)
def test_corrupted_history_leaves_it_empty(temp_dir, text):
    path = temp_dir / "bad.txt"
    path.write_text(HISTORY + text, encoding="utf-8")
    hist = GalaxyHistory()

    with pytest.raises(FileCorruptedError):
        load_galactic_history(hist, path)

    assert hist.total_battles == 0
    assert list(hist.fleets()) == []


def test_fleet_before_any_battle(temp_dir):
    path = temp_dir / "bad.txt"
    path.write_text("FLEET:Red|R|1|Ready for Jump\n" + HISTORY, encoding="utf-8")
    hist = GalaxyHistory()

    with pytest.raises(FileCorruptedError) as excinfo:
        load_galactic_history(hist, path)

    assert excinfo.value.line_no == 1
    assert hist.total_battles == 0


def test_history_round_trip(temp_dir, history):
    out = temp_dir / "saved.txt"
    assert save_galactic_history(history, out) == 2

    assert out.read_text(encoding="utf-8") == (
        "BATTLE:Battle of Hoth\n"
        "DATE:19800521\n"
        "FLEET:Rogue Squadron|R2|10|Withdrawal\n"
        "BATTLE:Battle of Yavin\n"
        "DATE:19770525\n"
        "FLEET:Red Squadron|R1|12|Ready for Jump, Shield Active\n"
        "FLEET:Gold Squadron|G1|8|Critical Damage\n"
        "FLEET:Blue Squadron|B1|6|\n"
    )

    reloaded = GalaxyHistory()
    load_galactic_history(reloaded, out)
    assert [b.key for b in reloaded.battles()] == [b.key for b in history.battles()]
    assert [(f.key, f.size, f.flags, f.label) for f in reloaded.fleets()] == [
        (f.key, f.size, f.flags, f.label) for f in history.fleets()
    ]
