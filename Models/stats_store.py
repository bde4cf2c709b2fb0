import json
import logging
import os

import config

logger = logging.getLogger(__name__)

POINTS_KEY = 'sudoku_points'
BEST_TIMES_KEY = 'sudoku_best_times'
THEME_KEY = 'sudoku_theme'
HISTORY_KEY = 'sudoku_history'


class StatsStore:
    """
    Persistent player stats: point total, best time per block size, theme
    and the list of won games.

    Stored as a small JSON key-value file. Points are kept as a bare integer
    string and best times as a mapping of block size -> milliseconds.
    With ``path=None`` nothing is written to disk.
    """
    def __init__(self, path=None):
        self.path = path
        self.points = 0
        self.best_times = {}
        self.theme = config.DEFAULT_THEME
        self.history = []

    @classmethod
    def open(cls, path=None):
        store = cls(path if path is not None else config.PATHS['stats'])
        store.load()
        return store

    def load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self.points = int(data.get(POINTS_KEY, 0))
            self.best_times = {str(k): int(v) for k, v in data.get(BEST_TIMES_KEY, {}).items()}
            self.theme = data.get(THEME_KEY, config.DEFAULT_THEME)
            self.history = list(data.get(HISTORY_KEY, []))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable stats file %s: %s", self.path, e)
            self.points, self.best_times = 0, {}
            self.theme, self.history = config.DEFAULT_THEME, []

    def save(self):
        if not self.path:
            return
        data = {
            POINTS_KEY: str(self.points),
            BEST_TIMES_KEY: self.best_times,
            THEME_KEY: self.theme,
            HISTORY_KEY: self.history,
        }
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error("Could not save stats to %s: %s", self.path, e)

    # --- Points ---
    def add_points(self, amount):
        self.points += amount

    def spend_points(self, amount):
        """Deduct amount if affordable. Returns False and leaves points alone otherwise."""
        if self.points < amount:
            return False
        self.points -= amount
        return True

    # --- Best times ---
    def best_time(self, n):
        return self.best_times.get(str(n))

    def record_time(self, n, elapsed_ms):
        """Store elapsed_ms as the best for block size n if there is none or it is faster."""
        best = self.best_time(n)
        if best is None or elapsed_ms < best:
            self.best_times[str(n)] = elapsed_ms
            return True
        return False

    def record_win(self, n, elapsed_ms, score):
        self.history.append({'size': n, 'elapsed_ms': elapsed_ms, 'score': score})

    def wins_for(self, n):
        return [h for h in self.history if h.get('size') == n]
