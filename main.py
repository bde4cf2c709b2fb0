import argparse
import logging
import tkinter as tk

import config
from Controllers.controller import SudokuController
from Models.stats_store import StatsStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Sudoku on a 9x9 or 16x16 board")
    parser.add_argument(
        "--size",
        type=int,
        choices=config.SUPPORTED_BLOCK_SIZES,
        default=config.DEFAULT_BLOCK_SIZE,
        help="Block size: 3 for 9x9, 4 for 16x16",
    )
    parser.add_argument(
        "--stats-file",
        default=config.PATHS['stats'],
        help="Where points, best times and theme are stored",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    root = tk.Tk()
    SudokuController(root, stats=StatsStore.open(args.stats_file), block_size=args.size)
    root.mainloop()


if __name__ == "__main__":
    main()
