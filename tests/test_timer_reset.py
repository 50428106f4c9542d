from __future__ import annotations

from fallingblocks.game_state import GameSession, SessionState
from fallingblocks.pieces import TetrominoType
from fallingblocks.ticker import GravityTimer


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def _running(fixed_rng, speed: int = 1) -> GameSession:
    session = GameSession(rng=fixed_rng(TetrominoType.I), speed=speed)
    session.start()
    return session


def test_one_tick_per_interval(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    assert timer.advance(999) == 0
    assert session.current_piece.y == 0
    assert timer.advance(1) == 1
    assert session.current_piece.y == 1
    assert timer.advance(2500) == 2
    assert session.current_piece.y == 3
    assert timer.drop_accum == 500


def test_idle_and_paused_sessions_do_not_accumulate(fixed_rng):
    session = GameSession(rng=fixed_rng(TetrominoType.I))
    timer = GravityTimer(session)
    assert timer.advance(5000) == 0
    session.start()
    session.pause()
    assert timer.advance(5000) == 0
    assert timer.drop_accum == 0
    session.resume()
    assert timer.advance(session.drop_interval_ms - 1) == 0
    assert session.current_piece.y == 0


def test_speed_change_reschedules_instead_of_stacking(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    timer.advance(900)
    assert timer.set_speed(10) == 10
    assert timer.interval_ms == 100
    assert timer.drop_accum == 0
    assert timer.advance(100) == 1
    assert session.current_piece.y == 1


def test_rapid_speed_changes_fire_one_tick_per_interval(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    for level in (3, 7, 2, 9, 5):
        timer.set_speed(level)
        assert timer.advance(timer.interval_ms - 1) == 0
    timer.set_speed(5)
    assert timer.advance(timer.interval_ms) == 1
    assert session.current_piece.y == 1


def test_session_speed_change_is_picked_up(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    timer.advance(900)
    session.set_speed(10)
    assert timer.advance(50) == 0
    assert timer.interval_ms == 100
    assert timer.advance(50) == 1


def test_poll_uses_injected_clock(fixed_rng):
    clock = FakeClock()
    session = _running(fixed_rng)
    timer = GravityTimer(session, clock=clock)
    assert timer.poll() == 0
    clock.advance(0.5)
    assert timer.poll() == 0
    clock.advance(0.5)
    assert timer.poll() == 1
    assert session.current_piece.y == 1


def test_game_over_stops_ticks(fixed_rng):
    session = _running(fixed_rng, speed=10)
    timer = GravityTimer(session)
    session.board.fill_row(1, skip={0})
    fired = timer.advance(10_000)
    assert session.state is SessionState.GAME_OVER
    assert fired < 100
    assert timer.drop_accum == 0
    assert timer.advance(1000) == 0


def test_reset_clears_pending_time(fixed_rng):
    clock = FakeClock()
    session = _running(fixed_rng)
    timer = GravityTimer(session, clock=clock)
    timer.poll()
    clock.advance(0.9)
    timer.poll()
    timer.reset()
    assert timer.last_ts is None
    assert timer.drop_accum == 0
    clock.advance(0.9)
    assert timer.poll() == 0


def test_speed_changed_and_restored_still_restarts_interval(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    timer.advance(900)
    session.set_speed(10)
    session.set_speed(1)
    assert timer.advance(100) == 0
    assert session.current_piece.y == 0
    assert timer.advance(900) == 1


def test_restart_discards_pending_time(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    timer.advance(900)
    session.start()
    assert timer.advance(100) == 0
    assert session.current_piece.y == 0
    assert timer.advance(900) == 1


def test_reset_then_start_discards_pending_time(fixed_rng):
    session = _running(fixed_rng)
    timer = GravityTimer(session)
    timer.advance(500)
    session.reset()
    session.set_speed(1)
    session.start()
    assert timer.advance(500) == 0
