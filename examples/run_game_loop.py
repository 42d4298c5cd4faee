import asyncio

from rpsmatch import InvalidOperation, MatchSession
from rpsmatch import text


def render(snap):
    st = snap.state
    if snap.thinking:
        print(f"You: {text.choice_label(snap.player_choice)}  CPU: ?  ... {snap.message}")
        return
    if snap.last_outcome is not None and snap.dialog is None:
        dots = " ".join(o.value[0] for o in st.history)
        print(f"You: {text.choice_label(snap.player_choice)}  CPU: {text.choice_label(snap.opponent_choice)}  -> {snap.message}")
        print(f"  Score {st.player_score}-{st.opponent_score} (first to {st.win_limit})"
              f"  streak={st.current_streak} best={st.best_streak}  [{dots}]")


async def main():
    session = MatchSession()
    session.subscribe(render)
    print(text.IDLE + "  (r)ock, (p)aper, (s)cissors, (q)uit")
    while True:
        raw = (await asyncio.to_thread(input, "> ")).strip()
        if raw.lower() in ("q", "quit", "exit"):
            await session.exit_to_menu()
            return
        try:
            await session.play(raw)
        except ValueError as e:
            print(e)
            continue
        except InvalidOperation as e:
            print(e)
            continue

        winner = session.snapshot().dialog
        if winner is not None:
            icon, title, blurb = text.DIALOG[winner]
            print(f"\n{icon} {title}\n{blurb}")
            again = (await asyncio.to_thread(input, "PLAY AGAIN? [y/N] ")).strip().lower()
            if again != "y":
                await session.exit_to_menu()
                return
            await session.play_again()
            print(text.IDLE)


if __name__ == "__main__":
    asyncio.run(main())
