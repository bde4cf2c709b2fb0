import logging
import random
import time
from collections import namedtuple

import config
from Models.errors import GenerationFailure, IllegalMove

logger = logging.getLogger(__name__)

# board is the grid after the move; accepted means the candidate was written
MoveResult = namedtuple('MoveResult', ['board', 'accepted', 'won', 'mistake'])


class SudokuLogic:
    """Helper functions for Sudoku rules, board generation and move checks.

    ``n`` is always the block size, the board is ``n*n`` cells wide.
    """

    @staticmethod
    def make_empty_board(size):
        return [[0]*size for _ in range(size)]

    @staticmethod
    def clone_board(board):
        return [row[:] for row in board]

    @staticmethod
    def is_safe(board, r, c, val, n):
        """True if val appears nowhere else in the row, column and n x n block of (r, c)."""
        size = n * n
        for x in range(size):
            if x != c and board[r][x] == val: return False
            if x != r and board[x][c] == val: return False

        start_r, start_c = r - r % n, c - c % n
        for i in range(start_r, start_r + n):
            for j in range(start_c, start_c + n):
                if (i, j) != (r, c) and board[i][j] == val: return False
        return True

    @staticmethod
    def candidates(board, r, c, n):
        """Values 1..n*n not yet used in the row, column or block of (r, c)."""
        size = n * n
        start_r, start_c = r - r % n, c - c % n
        used = set(board[r])
        used.update(board[i][c] for i in range(size))
        for i in range(start_r, start_r + n):
            used.update(board[i][start_c:start_c + n])
        return [v for v in range(1, size + 1) if v not in used]

    @staticmethod
    def is_valid_solution(board, n):
        size = n * n
        if len(board) != size or any(len(row) != size for row in board):
            return False
        expected = set(range(1, size + 1))
        for i in range(size):
            if set(board[i]) != expected: return False
            if {board[r][i] for r in range(size)} != expected: return False
        for br in range(0, size, n):
            for bc in range(0, size, n):
                block = {board[i][j] for i in range(br, br + n) for j in range(bc, bc + n)}
                if block != expected: return False
        return True

    @staticmethod
    def is_complete(board):
        return all(val != 0 for row in board for val in row)

    @staticmethod
    def fill_board(n, rng=None, max_placements=None):
        """Fill an empty n*n x n*n grid by randomized backtracking in row-major order.

        Raises GenerationFailure when the search is exhausted, or when it places
        more than ``max_placements`` values on this random path.
        """
        if n < 1:
            raise ValueError(f"Block size must be positive, got {n}")
        rng = rng or random
        size = n * n
        board = SudokuLogic.make_empty_board(size)
        placements = 0

        def fill(cell):
            nonlocal placements
            if cell == size * size: return True
            r, c = divmod(cell, size)
            nums = SudokuLogic.candidates(board, r, c, n)
            rng.shuffle(nums)
            for v in nums:
                if max_placements is not None and placements >= max_placements:
                    return False
                if not SudokuLogic.is_safe(board, r, c, v, n): continue
                board[r][c] = v
                placements += 1
                if fill(cell + 1): return True
                board[r][c] = 0
            return False

        if not fill(0):
            logger.debug("Fill of block size %d gave up after %d placements", n, placements)
            raise GenerationFailure(n)
        return board

    @staticmethod
    def carve(solution, fraction=config.EMPTY_FRACTION, rng=None):
        """Copy of solution with floor(size*size*fraction) distinct cells zeroed."""
        if not 0 <= fraction <= 1:
            raise ValueError(f"Empty fraction must be within [0, 1], got {fraction}")
        rng = rng or random
        size = len(solution)
        puzzle = SudokuLogic.clone_board(solution)
        remaining = int(size * size * fraction)

        while remaining > 0:
            r = rng.randrange(size)
            c = rng.randrange(size)
            if puzzle[r][c] != 0:
                puzzle[r][c] = 0
                remaining -= 1
        return puzzle

    @staticmethod
    def generate_puzzle(n, empty_fraction=config.EMPTY_FRACTION, rng=None,
                        max_attempts=None, max_placements=None):
        """Return (board, solution) for block size n."""
        if max_attempts is None:
            max_attempts = config.GENERATION_CONFIG['max_attempts']
        if max_placements is None:
            max_placements = config.GENERATION_CONFIG['max_placements']

        start = time.perf_counter()
        for attempt in range(1, max_attempts + 1):
            try:
                solution = SudokuLogic.fill_board(n, rng=rng, max_placements=max_placements)
                break
            except GenerationFailure:
                logger.warning("Generation attempt %d/%d failed for block size %d",
                               attempt, max_attempts, n)
        else:
            raise GenerationFailure(n, attempts=max_attempts)

        board = SudokuLogic.carve(solution, empty_fraction, rng=rng)
        logger.info("Generated %dx%d puzzle in %.3fs (%d empty cells)",
                    n*n, n*n, time.perf_counter() - start,
                    sum(row.count(0) for row in board))
        return board, solution

    @staticmethod
    def check_move(board, r, c):
        size = len(board)
        if not (0 <= r < size and 0 <= c < size):
            raise IllegalMove(r, c, "cell out of range")
        if board[r][c] != 0:
            raise IllegalMove(r, c, "cell already filled")

    @staticmethod
    def apply_move(board, solution, r, c, val):
        """Validate a candidate against the answer key.

        Never mutates its arguments: an accepted move returns a new board.
        Moves on filled or out-of-range cells are rejected without counting
        as a mistake.
        """
        try:
            SudokuLogic.check_move(board, r, c)
        except IllegalMove as e:
            logger.debug("%s", e)
            return MoveResult(board, False, False, False)

        if solution[r][c] != val:
            return MoveResult(board, False, False, True)

        new_board = SudokuLogic.clone_board(board)
        new_board[r][c] = val
        return MoveResult(new_board, True, SudokuLogic.is_complete(new_board), False)
