from rpsmatch import MatchEngine, Move

# Simple smoke test: player always plays Rock against a seeded random CPU
engine = MatchEngine(random_seed=7)

for match in range(3):
    t = 0
    while not engine.state.decided:
        r = engine.resolve_round(Move.ROCK)
        t += 1
        st = r.state
        print(f"match={match+1} round={t} cpu={r.opponent_move.name} result={r.outcome.value} "
              f"score={st.player_score}-{st.opponent_score} streak={st.current_streak} best={st.best_streak}")
    print(f"Summary: status={engine.state.status.value} rounds={t} history={[o.value for o in engine.state.history]}")
    engine.reset()
