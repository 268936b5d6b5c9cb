import numpy as np

from lucky4.generation.numbers import NumberGenerator, is_valid_number_sequence
from lucky4.rules.engine import analyze_performance
from lucky4.rules.fsm import Action, GameStateManager
from lucky4.state import GameStatus


def test_e2e_random_policy_invariants():
    rng = np.random.default_rng(0)
    fsm = GameStateManager(NumberGenerator(rng))
    history = []
    for i in range(100):
        s = fsm.create_game_state(f"p{i}")
        action = Action.CANCEL if rng.random() < 0.2 else Action.PLAY
        picks = [int(n) for n in rng.integers(0, 10, size=4)]
        ns = fsm.transition_state(s, action, {"player_numbers": picks})
        assert s.status == GameStatus.ACTIVE
        if ns.status == GameStatus.COMPLETED:
            assert is_valid_number_sequence(list(ns.player_numbers))
            assert is_valid_number_sequence(list(ns.lucky_numbers))
            assert ns.matches == sum(p == l for p, l in zip(ns.player_numbers, ns.lucky_numbers))
            history.append(ns)
        else:
            assert ns.status == GameStatus.CANCELLED and ns.player_numbers is None
        for a in (Action.PLAY, Action.CANCEL):
            assert not fsm.validate_state_transition(ns, a).is_valid
    perf = analyze_performance(history)
    assert perf.total_games == len(history)
    assert perf.wins + perf.losses == perf.total_games
