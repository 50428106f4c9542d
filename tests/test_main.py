import logging
import random

from fallingblocks.__main__ import autoplay, main
from fallingblocks.game_state import GameSession, SessionState


def test_autoplay_is_reproducible():
    runs = []
    for _ in range(2):
        session = GameSession(rng=random.Random(4))
        played = autoplay(session, 300, random.Random(4))
        runs.append((played, session.score, session.lines_cleared, session.render_grid()))
    assert runs[0] == runs[1]
    assert runs[0][0] <= 300


def test_autoplay_stops_at_game_over():
    session = GameSession(rng=random.Random(0))
    played = autoplay(session, 100_000, random.Random(0))
    assert session.state is SessionState.GAME_OVER
    assert played < 100_000


def test_main_prints_frame_and_logs(capsys, caplog):
    with caplog.at_level(logging.INFO, logger="fallingblocks.__main__"):
        main(["--seed", "3", "--ticks", "50", "--speed", "7"])
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 21
    assert all(set(line) <= {"#", "."} for line in out[:20])
    assert out[20].startswith("Score: ")
    assert "Played" in caplog.text
