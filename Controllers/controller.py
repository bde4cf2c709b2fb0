import logging

import config
from Models.errors import GenerationFailure, InsufficientPoints, InvalidBlockSize
from Models.game_session import GameSession, LOST, format_time
from Models.stats_store import StatsStore
from Views.view import SudokuView

logger = logging.getLogger(__name__)


class SudokuController:
    def __init__(self, root, stats=None, block_size=config.DEFAULT_BLOCK_SIZE):
        self.root = root
        self.stats = stats if stats is not None else StatsStore.open()
        self.view = SudokuView(root, self)
        self.session = GameSession(self.stats, block_size=block_size)

        self.selected_number = 1
        self.tick_job = None
        self.game_id = 0

        self.view.apply_theme(self.stats.theme)
        self.view.set_selected_size(block_size)
        self.new_game()

    # --- Game lifecycle ---
    def new_game(self):
        self._start(self.session.new_game)

    def regenerate(self):
        try:
            self._start(self.session.regenerate)
        except InsufficientPoints as e:
            self.view.show_warning("Regenerate", f"Not enough points to regenerate! ({e.points}/{e.cost})")

    def change_size(self, n):
        previous = self.session.n
        try:
            started = self._start(lambda: self.session.change_block_size(n))
        except InvalidBlockSize as e:
            self.view.set_selected_size(previous)
            self.view.show_warning("Board Size", str(e))
            return
        if not started:
            self.view.set_selected_size(previous)

    def _start(self, action):
        try:
            action()
        except GenerationFailure as e:
            logger.error("%s", e)
            self.view.update_stats(status="Generation failed, try again", color="red")
            return False
        self.game_id += 1
        self.selected_number = 1
        size = self.session.size
        self.view.draw_grid(self.session.n, self.session.board)
        self.view.draw_number_bar(size, self.selected_number)
        self._refresh_stats(status="Good luck!")
        self.start_timer()
        return True

    # --- Timer ---
    def start_timer(self):
        self.stop_timer()
        self.tick_job = self.root.after(config.TIMER_CONFIG['tick_ms'], self._tick)

    def stop_timer(self):
        if self.tick_job is not None:
            self.root.after_cancel(self.tick_job)
            self.tick_job = None

    def _tick(self):
        self.view.update_stats(time_text=format_time(self.session.elapsed_ms()))
        self.tick_job = self.root.after(config.TIMER_CONFIG['tick_ms'], self._tick)

    # --- Input ---
    def select_number(self, val):
        self.selected_number = val
        self.view.highlight_number(val)

    def cell_clicked(self, r, c):
        if self.session.is_over:
            return
        self.view.select_cell(r, c)
        if self.session.board[r][c] == 0:
            self.place_number(r, c, self.selected_number)

    def key_pressed(self, char):
        if self.view.selected_cell is None:
            return
        val = int(char)
        if 1 <= val <= self.session.size:
            r, c = self.view.selected_cell
            self.place_number(r, c, val)

    def place_number(self, r, c, val):
        result = self.session.apply_move(r, c, val)
        if result.accepted:
            self.view.update_cell_value(r, c, val)
            self.view.clear_error(r, c)
            if result.won:
                self._on_won()
        elif result.mistake:
            self.view.flash_error(r, c)
            game_id = self.game_id
            self.root.after(config.TIMER_CONFIG['error_flash_ms'],
                            lambda: self._clear_error(game_id, r, c))
            self._refresh_stats()
            if self.session.status == LOST:
                self._on_lost()

    def _clear_error(self, game_id, r, c):
        if game_id != self.game_id:
            return
        if self.session.error_cell == (r, c):
            self.session.clear_error()
        if self.session.board[r][c] == 0:
            self.view.clear_error(r, c)

    def _on_won(self):
        self.stop_timer()
        elapsed = self.session.elapsed_ms()
        self._refresh_stats(status="Solved!", color="green")
        self.root.after(200, lambda: self.view.show_info(
            "Congratulations!",
            f"You solved it in {format_time(elapsed)}.\nYou earned {self.session.last_score} points."))

    def _on_lost(self):
        self.stop_timer()
        self._refresh_stats(status="Game Over", color="red")
        self.root.after(200, lambda: self.view.show_info("Game Over", "Game Over! You are out of lives."))

    # --- Themes & stats ---
    def change_theme(self, theme):
        self.view.apply_theme(theme)
        self.view.restyle_cells()
        self.stats.theme = theme
        self.stats.save()

    def win_history(self):
        return self.stats.history

    def _refresh_stats(self, status=None, color="black"):
        best = self.stats.best_time(self.session.n)
        self.view.update_stats(
            status=status,
            color=color,
            time_text=format_time(self.session.elapsed_ms()),
            points=self.stats.points,
            best_text=format_time(best) if best is not None else "--:--",
            lives=self.session.lives,
        )
