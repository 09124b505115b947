from tests.factories import battle, creature, side

from treebot.schema import CreatureSnapshot, Stat


def test_hp_ratio():
    assert creature(hp=25, max_hp=100).hp_ratio == 0.25


def test_hp_ratio_without_initial_hp_is_zero():
    mon = CreatureSnapshot(name="Ghost", types=("ghost",))
    assert mon.hp_ratio == 0.0
    assert mon.current(Stat.HP) == 0


def test_primary_and_secondary_types():
    mon = creature(types=("grass", "poison"))
    assert mon.primary_type == "grass"
    assert mon.secondary_type == "poison"
    assert creature(types=("fire",)).secondary_type is None


def test_active_and_alive_count():
    team = side(creature("A"), creature("B", fainted=True), creature("C"), active=2)
    assert team.active.name == "C"
    assert team.alive_count == 2
    assert team.size == 3


def test_missing_active():
    assert side(creature("A"), active=None).active is None
    assert side(creature("A"), active=5).active is None


def test_snapshot_side_lookup():
    snap = battle(side(creature("Mine")), side(creature("Theirs")))
    assert snap.side(0).active.name == "Mine"
    assert snap.side(1).active.name == "Theirs"
