import logging
import time

import config
from Models.errors import GenerationFailure, IllegalMove, InsufficientPoints, InvalidBlockSize
from Models.sudoku_logic import MoveResult, SudokuLogic

logger = logging.getLogger(__name__)

IDLE = 'idle'
ACTIVE = 'active'
WON = 'won'
LOST = 'lost'


def lives_for(n):
    return config.LIVES_BY_BLOCK_SIZE.get(n, config.DEFAULT_LIVES)


def compute_score(elapsed_ms):
    """One point lost per 15 s of play, never below the floor."""
    cfg = config.SCORE_CONFIG
    return max(cfg['min_score'], cfg['max_score'] - int(elapsed_ms) // cfg['penalty_ms'])


def format_time(ms):
    total = int(ms) // 1000
    return f"{total // 60:02d}:{total % 60:02d}"


class GameSession:
    """
    State of one player's session: the current board/solution pair, lives,
    timer and status, plus the persistent stats it scores into.

    All operations run to completion synchronously. The timer is read from a
    monotonic clock on demand, so callers may poll ``elapsed_ms`` as rarely
    or as often as they like.
    """
    def __init__(self, stats, block_size=config.DEFAULT_BLOCK_SIZE, clock=time.monotonic,
                 rng=None, empty_fraction=config.EMPTY_FRACTION):
        if block_size not in config.SUPPORTED_BLOCK_SIZES:
            raise InvalidBlockSize(block_size, config.SUPPORTED_BLOCK_SIZES)
        self.stats = stats
        self.n = block_size
        self.clock = clock
        self.rng = rng
        self.empty_fraction = empty_fraction

        self.board = []
        self.solution = []
        self.lives = 0
        self.status = IDLE
        self.error_cell = None
        self.last_score = None
        self._start = None
        self._frozen_ms = 0

    @property
    def size(self):
        return self.n * self.n

    @property
    def is_over(self):
        return self.status in (WON, LOST)

    # --- Lifecycle ---
    def new_game(self):
        board, solution = SudokuLogic.generate_puzzle(self.n, self.empty_fraction, rng=self.rng)
        self.board, self.solution = board, solution
        self.lives = lives_for(self.n)
        self.error_cell = None
        self.last_score = None
        self.status = ACTIVE
        self._frozen_ms = 0
        self._start = self.clock()
        logger.info("New %dx%d game with %d lives", self.size, self.size, self.lives)

    def change_block_size(self, n):
        if n not in config.SUPPORTED_BLOCK_SIZES:
            logger.warning("Rejected block size %s, keeping %d", n, self.n)
            raise InvalidBlockSize(n, config.SUPPORTED_BLOCK_SIZES)
        previous, self.n = self.n, n
        try:
            self.new_game()
        except GenerationFailure:
            self.n = previous
            raise

    def regenerate(self):
        cost = config.REGENERATE_COST
        if self.stats.points < cost:
            raise InsufficientPoints(self.stats.points, cost)
        # points are only spent once a new puzzle exists
        self.new_game()
        self.stats.spend_points(cost)
        self.stats.save()
        logger.info("Regenerated for %d points (%d left)", cost, self.stats.points)

    # --- Timer ---
    def elapsed_ms(self):
        if self.status != ACTIVE:
            return self._frozen_ms
        return int((self.clock() - self._start) * 1000)

    def _stop_timer(self):
        self._frozen_ms = self.elapsed_ms()

    # --- Moves ---
    def apply_move(self, r, c, val):
        try:
            if self.status != ACTIVE:
                raise IllegalMove(r, c, f"game is {self.status}")
            SudokuLogic.check_move(self.board, r, c)
        except IllegalMove as e:
            logger.debug("%s", e)
            return MoveResult(self.board, False, False, False)

        result = SudokuLogic.apply_move(self.board, self.solution, r, c, val)
        if result.accepted:
            self.board = result.board
            self.error_cell = None
            if result.won:
                self._win()
        elif result.mistake:
            self.error_cell = (r, c)
            self._lose_life()
        return result

    def clear_error(self):
        self.error_cell = None

    def _lose_life(self):
        if self.lives > 1:
            self.lives -= 1
            logger.debug("Wrong number, %d lives left", self.lives)
            return
        self.lives = 0
        self._stop_timer()
        self.status = LOST
        logger.info("Game over after %d ms", self._frozen_ms)

    def _win(self):
        self._stop_timer()
        self.status = WON
        elapsed = self._frozen_ms
        score = compute_score(elapsed)
        self.last_score = score
        self.stats.add_points(score)
        new_best = self.stats.record_time(self.n, elapsed)
        self.stats.record_win(self.n, elapsed, score)
        self.stats.save()
        logger.info("Solved %dx%d in %d ms for %d points%s", self.size, self.size,
                    elapsed, score, " (new best)" if new_best else "")
