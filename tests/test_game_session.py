import random

import pytest

from Models import game_session
from Models.errors import GenerationFailure, InsufficientPoints, InvalidBlockSize
from Models.game_session import GameSession, compute_score, format_time, lives_for
from Models.stats_store import StatsStore


def empty_cells(session):
    return [(r, c) for r in range(session.size) for c in range(session.size) if session.board[r][c] == 0]


def wrong_value(session, r, c):
    return session.solution[r][c] % session.size + 1


def solve(session):
    results = []
    for r, c in empty_cells(session):
        results.append(session.apply_move(r, c, session.solution[r][c]))
    return results


# ---------- Scoring ----------


@pytest.mark.parametrize("elapsed, expected", [
    (0, 20),
    (14999, 20),
    (15000, 19),
    (300000, 5),
    (600000, 5),
])
def test_compute_score(elapsed, expected):
    assert compute_score(elapsed) == expected


def test_lives_budget():
    assert lives_for(3) == 3
    assert lives_for(4) == 4
    assert lives_for(5) == 5


def test_format_time():
    assert format_time(0) == "00:00"
    assert format_time(61999) == "01:01"
    assert format_time(600000) == "10:00"


# ---------- Lifecycle ----------


def test_new_game_starts_active(session):
    assert session.status == game_session.ACTIVE
    assert session.lives == 3
    assert session.elapsed_ms() == 0
    assert len(empty_cells(session)) == int(81 * 0.55)


def test_elapsed_is_read_from_clock(session, clock):
    clock.advance(2500)
    assert session.elapsed_ms() == 2500
    clock.advance(1000)
    assert session.elapsed_ms() == 3500


def test_unsupported_block_size_is_rejected_before_generation(session, monkeypatch):
    board = session.board

    def fail(*args, **kwargs):
        raise AssertionError("generator must not run")

    monkeypatch.setattr(game_session.SudokuLogic, "generate_puzzle", fail)
    with pytest.raises(InvalidBlockSize):
        session.change_block_size(5)

    assert session.n == 3
    assert session.board is board


def test_change_block_size_to_16x16(stats, clock):
    game = GameSession(stats, block_size=3, clock=clock, rng=random.Random(3))
    game.change_block_size(4)

    assert game.size == 16
    assert game.lives == 4
    assert len(game.solution) == 16


def test_constructor_rejects_unsupported_size(stats):
    with pytest.raises(InvalidBlockSize):
        GameSession(stats, block_size=5)


# ---------- Moves ----------


def test_prefilled_cell_move_is_ignored(session):
    r, c = next((r, c) for r in range(9) for c in range(9) if session.board[r][c] != 0)
    before = [row[:] for row in session.board]

    result = session.apply_move(r, c, wrong_value(session, r, c))

    assert not result.accepted
    assert session.board == before
    assert session.lives == 3


def test_wrong_move_costs_a_life_and_flags_cell(session):
    r, c = empty_cells(session)[0]

    result = session.apply_move(r, c, wrong_value(session, r, c))

    assert result.mistake
    assert session.lives == 2
    assert session.error_cell == (r, c)
    assert session.board[r][c] == 0

    session.apply_move(r, c, session.solution[r][c])
    assert session.error_cell is None


def test_three_wrong_moves_lose_the_game(session, clock):
    r, c = empty_cells(session)[0]
    for _ in range(3):
        session.apply_move(r, c, wrong_value(session, r, c))
        clock.advance(1000)

    assert session.status == game_session.LOST
    assert session.lives == 0
    assert session.elapsed_ms() == 2000

    result = session.apply_move(r, c, session.solution[r][c])
    assert not result.accepted
    assert not result.mistake
    assert session.board[r][c] == 0
    assert session.lives == 0


def test_completing_the_board_wins_once_and_scores(session, stats, clock):
    clock.advance(30000)
    results = solve(session)

    assert [res.won for res in results].count(True) == 1
    assert results[-1].won
    assert session.status == game_session.WON
    assert session.last_score == 18
    assert stats.points == 18
    assert stats.best_time(3) == 30000

    r, c = 0, 0
    assert not session.apply_move(r, c, session.solution[r][c]).accepted


def test_win_persists_stats(session, stats, clock):
    clock.advance(1000)
    solve(session)

    reloaded = StatsStore.open(stats.path)
    assert reloaded.points == 20
    assert reloaded.best_time(3) == 1000
    assert reloaded.wins_for(3) == [{'size': 3, 'elapsed_ms': 1000, 'score': 20}]


def test_best_time_only_improves(session, stats, clock):
    clock.advance(40000)
    solve(session)
    assert stats.best_time(3) == 40000

    session.new_game()
    clock.advance(60000)
    solve(session)
    assert stats.best_time(3) == 40000

    session.new_game()
    clock.advance(20000)
    solve(session)
    assert stats.best_time(3) == 20000


def test_timer_freezes_after_win(session, clock):
    clock.advance(5000)
    solve(session)
    clock.advance(5000)

    assert session.elapsed_ms() == 5000


# ---------- Regenerate ----------


def test_regenerate_without_enough_points(session, stats):
    stats.points = 9
    board, solution = session.board, session.solution

    with pytest.raises(InsufficientPoints):
        session.regenerate()

    assert stats.points == 9
    assert session.board is board
    assert session.solution is solution


def test_regenerate_spends_points_and_keeps_size(session, stats):
    stats.points = 10
    old_solution = session.solution

    session.regenerate()

    assert stats.points == 0
    assert session.n == 3
    assert session.status == game_session.ACTIVE
    assert session.solution is not old_solution
    assert StatsStore.open(stats.path).points == 0


def test_regenerate_after_loss_starts_fresh_game(session, stats):
    r, c = empty_cells(session)[0]
    for _ in range(3):
        session.apply_move(r, c, wrong_value(session, r, c))
    stats.points = 25

    session.regenerate()

    assert session.status == game_session.ACTIVE
    assert session.lives == 3
    assert stats.points == 15


def test_failed_regenerate_keeps_points_and_board(session, stats, monkeypatch):
    stats.points = 10
    stats.save()
    board, solution = session.board, session.solution

    def fail(n, *args, **kwargs):
        raise GenerationFailure(n)

    monkeypatch.setattr(game_session.SudokuLogic, "generate_puzzle", fail)
    with pytest.raises(GenerationFailure):
        session.regenerate()

    assert stats.points == 10
    assert StatsStore.open(stats.path).points == 10
    assert session.board is board
    assert session.solution is solution
    assert session.status == game_session.ACTIVE


def test_failed_size_change_keeps_previous_size(session, monkeypatch):
    def fail(n, *args, **kwargs):
        raise GenerationFailure(n)

    monkeypatch.setattr(game_session.SudokuLogic, "generate_puzzle", fail)
    with pytest.raises(GenerationFailure):
        session.change_block_size(4)

    assert session.n == 3
    assert len(session.board) == 9
