import pytest

from tests.factories import battle, creature, move, side

from treebot.schema import StatusEffect


@pytest.fixture
def flamethrower():
    return move("Flamethrower", type="fire", power=90, accuracy=100, crit_ratio=0.0)


@pytest.fixture
def growl():
    return move("Growl", type="normal", power=None, effect=StatusEffect.OTHER)


@pytest.fixture
def fire_vs_grass(flamethrower, growl):
    """Fire creature at half HP facing a Grass creature at 80%."""
    me = creature("Charmander", types=("fire",), hp=50, moves=(flamethrower, growl))
    foe = creature("Bulbasaur", types=("grass",), hp=80)
    return battle(side(me), side(foe))
