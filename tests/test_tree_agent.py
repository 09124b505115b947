import time

import pytest

from tests.factories import battle, creature, move, side

from treebot.agents.tree import TreeSearchAgent
from treebot.config import OpponentModel, SearchConfig
from treebot.scorer import ActionScorer
from treebot.schema import AttackAction, BattleSnapshot, SwitchAction
from treebot.search import legal_actions


def test_defaults():
    agent = TreeSearchAgent()
    assert agent.config.max_depth == 4
    assert agent.config.max_thinking_time_s == 360.0
    assert agent.config.opponent_model is OpponentModel.EXPECTIMAX
    assert not agent.config.score_switches


def test_invalid_configuration_is_rejected():
    with pytest.raises(ValueError):
        TreeSearchAgent(max_depth=0)
    with pytest.raises(ValueError):
        TreeSearchAgent(max_thinking_time_s=0)
    with pytest.raises(ValueError):
        TreeSearchAgent(side=2)


def test_end_to_end_fire_vs_grass(fire_vs_grass, flamethrower, growl):
    scorer = ActionScorer()
    target = fire_vs_grass.side(1).active
    assert scorer.score(AttackAction(flamethrower), target) > scorer.score(AttackAction(growl), target)

    agent = TreeSearchAgent(max_thinking_time_s=10.0)
    assert agent.get_next_action(fire_vs_grass) == AttackAction(flamethrower)


def test_status_move_listed_first_still_loses(flamethrower, growl):
    me = creature("Charmander", types=("fire",), hp=50, moves=(growl, flamethrower))
    foe = creature("Bulbasaur", types=("grass",), hp=80)
    agent = TreeSearchAgent(max_thinking_time_s=10.0)
    assert agent.choose_action(battle(side(me), side(foe))) == AttackAction(flamethrower)


def test_choice_is_always_legal():
    me = side(
        creature("Lead", types=("water",), moves=(move("Surf", type="water", power=90), move("Rest", power=None))),
        creature("Reserve", types=("grass",)),
        creature("Down", fainted=True),
    )
    foe = side(creature("Foe", types=("fire",), moves=(move("Ember", type="fire", power=40),)), creature("Foe2"))
    snap = battle(me, foe)
    action = TreeSearchAgent(max_thinking_time_s=10.0).choose_action(snap)
    assert action in legal_actions(snap, 0)


def test_agent_on_side_one_plays_its_own_creature():
    ember = move("Ember", type="fire", power=40)
    snap = battle(side(creature("Foe", types=("grass",), moves=(move("Vine Whip", type="grass", power=45),))),
                  side(creature("Me", types=("fire",), moves=(ember,))))
    agent = TreeSearchAgent(side=1, max_thinking_time_s=10.0)
    assert agent.choose_action(snap) == AttackAction(ember)


def test_no_actions_returns_none():
    snap = battle(side(creature("Lead"), creature("Down", fainted=True)), side(creature()))
    agent = TreeSearchAgent(max_thinking_time_s=10.0)
    assert agent.choose_action(snap) is None
    assert agent.choose_action(None) is None


def test_near_zero_budget_falls_back_to_first_legal_action(flamethrower, growl):
    calls = []

    def slow_transition(snapshot, side_index, action):
        calls.append(action)
        time.sleep(0.2)
        return snapshot

    me = creature("Charmander", types=("fire",), hp=50, moves=(growl, flamethrower))
    snap = battle(side(me), side(creature("Bulbasaur", types=("grass",))))
    agent = TreeSearchAgent(max_thinking_time_s=0.01, transition=slow_transition)

    t0 = time.perf_counter()
    action = agent.choose_action(snap)
    elapsed = time.perf_counter() - t0

    assert action == AttackAction(growl)
    assert elapsed < 0.15
    stat = agent.decision_stats[-1]
    assert stat.used_fallback
    assert stat.fallback_reason == "timeout"

    # The abandoned worker stops at its next recursive step.
    time.sleep(0.5)
    settled = len(calls)
    time.sleep(0.3)
    assert len(calls) == settled


def test_fault_during_decision_falls_back(flamethrower):
    broken = BattleSnapshot(sides=(side(creature(moves=(flamethrower,))),), turn=3)
    agent = TreeSearchAgent(max_thinking_time_s=5.0)
    # The opponent side is missing: the search faults, the fallback still finds our move.
    assert agent.choose_action(broken) == AttackAction(flamethrower)
    assert agent.decision_stats[-1].fallback_reason == "fault"


def test_decision_stats_are_recorded(fire_vs_grass):
    agent = TreeSearchAgent(max_thinking_time_s=10.0)
    agent.choose_action(fire_vs_grass)
    stat = agent.decision_stats[-1]
    assert stat.agent == agent.name
    assert stat.battle_tag == "test-battle"
    assert stat.action == "Flamethrower"
    assert stat.nodes >= 1
    assert not stat.used_fallback


def test_choose_switch_target():
    agent = TreeSearchAgent()
    assert agent.choose_switch_target(side(creature(fainted=True), creature(fainted=True), creature())) == 2
    assert agent.choose_switch_target(side(creature(fainted=True))) is None
    assert agent.choose_switch_target(None) is None


def test_choose_switch_target_skips_the_active_creature():
    agent = TreeSearchAgent()
    assert agent.choose_switch_target(side(creature("Lead"), creature("Reserve"), active=0)) == 1
    assert agent.choose_switch_target(side(creature("Reserve"), creature("Lead"), active=1)) == 0
    assert agent.choose_switch_target(side(creature("Lead"), active=0)) is None


def test_fallback_prefers_first_usable_move(flamethrower, growl):
    agent = TreeSearchAgent()
    snap = battle(side(creature("Lead", moves=(growl, flamethrower)), creature("Reserve")), side(creature()))
    assert agent.fallback_action(snap) == AttackAction(growl)


def test_fallback_switches_when_no_move_is_usable():
    agent = TreeSearchAgent()
    snap = battle(side(creature("Lead"), creature(fainted=True), creature("Reserve")), side(creature()))
    assert agent.fallback_action(snap) == SwitchAction(2)
    assert agent.fallback_action(battle(side(creature("Lead")), side(creature()))) is None


def test_config_object_is_used_verbatim():
    config = SearchConfig(max_depth=2, max_thinking_time_s=1.0, opponent_model=OpponentModel.MINIMAX)
    assert TreeSearchAgent(config=config).config is config
