import pytest

from tests.factories import creature, move

from treebot.schema import AttackAction, StatusEffect, SwitchAction
from treebot.scorer import ActionScorer


@pytest.fixture
def scorer():
    return ActionScorer()


@pytest.fixture
def target():
    return creature("Target", types=("normal",))


def attack(**kwargs):
    return AttackAction(move=move(**kwargs))


def test_switch_and_missing_target_score_zero(scorer, target):
    assert scorer.score(SwitchAction(bench_index=1), target) == 0.0
    assert scorer.score(attack(power=100), None) == 0.0
    assert scorer.score(None, target) == 0.0


def test_neutral_damage_formula(scorer, target):
    assert scorer.score(attack(power=80), target) == pytest.approx(80.0)


def test_monotonic_in_power(scorer, target):
    assert scorer.score(attack(power=100), target) > scorer.score(attack(power=50), target)


def test_accuracy_penalty(scorer, target):
    accurate = scorer.score(attack(power=90, accuracy=100), target)
    inaccurate = scorer.score(attack(power=90, accuracy=85), target)
    assert accurate > inaccurate
    assert inaccurate == pytest.approx(accurate * 0.7)


def test_crit_bonus(scorer, target):
    assert scorer.score(attack(power=100, crit_ratio=1.0), target) == pytest.approx(150.0)


def test_dual_type_effectiveness_multiplies(scorer):
    grass_ground = creature(types=("grass", "ground"))
    grass_water = creature(types=("grass", "water"))
    ice = attack(type="ice", power=100)
    assert scorer.score(ice, grass_ground) == pytest.approx(400.0)
    assert scorer.score(ice, grass_water) == pytest.approx(100.0)


def test_immunity_scores_zero(scorer):
    assert scorer.score(attack(type="normal", power=100), creature(types=("ghost",))) == 0.0


@pytest.mark.parametrize(
    "effect, expected",
    [
        (StatusEffect.BOOST, 80.0),
        (StatusEffect.SLEEP, 70.0),
        (StatusEffect.SCREEN, 60.0),
        (StatusEffect.NO_OP, 5.0),
        (StatusEffect.OTHER, 30.0),
    ],
)
def test_status_move_values(scorer, target, effect, expected):
    assert scorer.score(attack(power=None, effect=effect), target) == expected


def test_boost_beats_no_op(scorer, target):
    boost = scorer.score(attack(name="Swords Dance", power=None, effect=StatusEffect.BOOST), target)
    splash = scorer.score(attack(name="Splash", power=None, effect=StatusEffect.NO_OP), target)
    assert boost > splash
