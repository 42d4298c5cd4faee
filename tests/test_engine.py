import itertools

import pytest

from rpsmatch import (
    HISTORY_LIMIT,
    MatchAlreadyDecided,
    MatchEngine,
    MatchState,
    MatchStatus,
    Move,
    Outcome,
    beats,
)

R, P, S = Move.ROCK, Move.PAPER, Move.SCISSORS


def scripted(*moves):
    it = iter(moves)
    return lambda: next(it)


EXPECTED = {
    (R, R): Outcome.DRAW, (R, P): Outcome.LOSE, (R, S): Outcome.WIN,
    (P, R): Outcome.WIN, (P, P): Outcome.DRAW, (P, S): Outcome.LOSE,
    (S, R): Outcome.LOSE, (S, P): Outcome.WIN, (S, S): Outcome.DRAW,
}


@pytest.mark.parametrize("player,opponent", list(EXPECTED))
def test_outcome_for_every_pair(player, opponent):
    engine = MatchEngine(opponent=scripted(opponent))
    r = engine.resolve_round(player)
    assert r.player_move == player
    assert r.opponent_move == opponent
    assert r.outcome == EXPECTED[(player, opponent)]
    assert (r.outcome == Outcome.WIN) == beats(player, opponent)
    assert (r.outcome == Outcome.LOSE) == beats(opponent, player)


def test_each_move_beats_exactly_one():
    for m in Move:
        assert sum(beats(m, o) for o in Move) == 1
        assert sum(beats(o, m) for o in Move) == 1


def test_first_round_win():
    engine = MatchEngine(opponent=scripted(S))
    r = engine.resolve_round(R)
    assert r.outcome == Outcome.WIN
    st = r.state
    assert st.player_score == 1
    assert st.opponent_score == 0
    assert st.current_streak == 1
    assert st.best_streak == 1
    assert st.history == (Outcome.WIN,)
    assert st.status == MatchStatus.IN_PROGRESS
    assert engine.state is st


def test_five_wins_end_the_match_on_the_fifth():
    engine = MatchEngine(opponent=scripted(*[S] * 5))
    for i in range(4):
        st = engine.resolve_round(R).state
        assert st.status == MatchStatus.IN_PROGRESS
        assert st.player_score == i + 1
    st = engine.resolve_round(R).state
    assert st.status == MatchStatus.PLAYER_WON
    assert st.player_score == 5
    assert st.current_streak == 5
    assert st.best_streak == 5


def test_opponent_reaching_limit():
    engine = MatchEngine(win_limit=2, opponent=scripted(P, P))
    engine.resolve_round(R)
    st = engine.resolve_round(R).state
    assert st.status == MatchStatus.OPPONENT_WON
    assert st.opponent_score == 2
    assert st.current_streak == 0


def test_win_draw_lose_streaks():
    engine = MatchEngine(opponent=scripted(S, R, P))
    streaks = [engine.resolve_round(R).state.current_streak for _ in range(3)]
    assert streaks == [1, 0, 0]
    assert engine.state.best_streak == 1
    assert engine.state.history == (Outcome.LOSE, Outcome.DRAW, Outcome.WIN)


def test_history_is_capped_most_recent_first():
    # alternate draw and loss so nobody wins before the cap is exceeded
    opp = [R, P] * 4 + [R, S]
    engine = MatchEngine(win_limit=10, opponent=scripted(*opp))
    outcomes = [engine.resolve_round(R).outcome for _ in range(len(opp))]
    st = engine.state
    assert len(st.history) == HISTORY_LIMIT
    assert list(st.history) == list(reversed(outcomes))[:HISTORY_LIMIT]
    assert st.history[0] == Outcome.WIN


def test_invariants_hold_over_random_matches():
    engine = MatchEngine(random_seed=1234)
    moves = itertools.cycle([R, P, S, S, P])
    for _ in range(50):
        while not engine.state.decided:
            st = engine.resolve_round(next(moves)).state
            assert st.current_streak <= st.best_streak
            assert len(st.history) <= HISTORY_LIMIT
            if st.history[0] != Outcome.WIN:
                assert st.current_streak == 0
            if not st.decided:
                assert st.player_score < st.win_limit
                assert st.opponent_score < st.win_limit
        assert (engine.state.player_score == 5) != (engine.state.opponent_score == 5)
        engine.reset()


def test_decided_match_rejects_rounds():
    engine = MatchEngine(win_limit=1, opponent=scripted(S, S))
    engine.resolve_round(R)
    before = engine.state
    with pytest.raises(MatchAlreadyDecided):
        engine.resolve_round(R)
    assert engine.state is before
    assert before.player_score == 1
    assert before.history == (Outcome.WIN,)


def test_reset_gives_fresh_state():
    engine = MatchEngine(win_limit=1, opponent=scripted(S, S))
    engine.resolve_round(R)
    st = engine.reset()
    assert st == MatchState(win_limit=1)
    assert st.player_score == 0 and st.opponent_score == 0
    assert st.current_streak == 0 and st.best_streak == 0
    assert st.history == ()
    assert st.status == MatchStatus.IN_PROGRESS
    # playable again
    assert engine.resolve_round(R).outcome == Outcome.WIN


def test_uniform_opponent_uses_every_move():
    engine = MatchEngine(win_limit=1000, random_seed=42)
    seen = {engine.resolve_round(R).opponent_move for _ in range(60)}
    assert seen == set(Move)


def test_bad_input():
    with pytest.raises(ValueError):
        MatchEngine(win_limit=0)
    engine = MatchEngine()
    with pytest.raises(ValueError):
        engine.resolve_round("lizard")
    assert engine.state == MatchState()


def test_move_parse():
    assert Move.parse("rock") == R
    assert Move.parse(" Paper ") == P
    assert Move.parse("s") == S
    assert Move.parse("2") == S
    assert Move.parse(1) == P
    for bad in ("", "x", None, True, 3, "spock"):
        with pytest.raises(ValueError):
            Move.parse(bad)


def test_to_dict():
    engine = MatchEngine(opponent=scripted(P))
    d = engine.resolve_round(S).to_dict()
    assert d["player_move"] == "SCISSORS"
    assert d["opponent_move"] == "PAPER"
    assert d["outcome"] == "WIN"
    assert d["state"]["history"] == ["WIN"]
    assert d["state"]["status"] == "IN_PROGRESS"
