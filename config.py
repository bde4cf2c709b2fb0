"""
Central configuration for the Sudoku game.

Gameplay rules, generator settings, timer intervals, themes and file paths.
"""
import os

# Block sizes (n) allowed by policy; the board is n*n x n*n
SUPPORTED_BLOCK_SIZES = (3, 4)
# Sizes listed in the board size selector; anything unsupported is refused
OFFERED_BLOCK_SIZES = (3, 4, 5)
DEFAULT_BLOCK_SIZE = 3

# Fraction of the solved grid that is emptied to make the puzzle
EMPTY_FRACTION = 0.55

# Wrong guesses allowed before the game is lost
LIVES_BY_BLOCK_SIZE = {3: 3, 4: 4}
DEFAULT_LIVES = 5

SCORE_CONFIG = {
    'max_score': 20,         # Score for an instant solve
    'min_score': 5,          # Floor, never less than this for a win
    'penalty_ms': 15000,     # One point lost per 15 s elapsed
}

REGENERATE_COST = 10

GENERATION_CONFIG = {
    'max_attempts': 10,      # Fresh fills tried before giving up
    'max_placements': 10000, # Values placed on one random path before restarting
}

TIMER_CONFIG = {
    'tick_ms': 1000,         # Display refresh of the clock
    'error_flash_ms': 600,   # How long a wrong cell stays red
}

# name -> (background, cell, prefilled cell, text, accent)
THEMES = {
    'frosty': ('#e8f1f8', 'white', '#d6e6f2', '#1d3557', '#457b9d'),
    'classic': ('#f0f0f0', 'white', '#e0e0e0', 'black', '#4a4a4a'),
    'midnight': ('#1e1e2e', '#2a2a3c', '#3a3a52', '#e0e0f0', '#8a8aff'),
    'forest': ('#e9f5e1', 'white', '#cfe8c0', '#1b4332', '#40916c'),
}
DEFAULT_THEME = 'frosty'

PATHS = {
    'stats': os.path.join(os.path.expanduser('~'), '.sudoku_game', 'stats.json'),
}
