class SudokuError(Exception):
    """Base class for all game errors."""


class GenerationFailure(SudokuError):
    def __init__(self, N, attempts=1):
        self.N = N
        self.attempts = attempts
        super().__init__(f"Could not fill a {N*N}x{N*N} grid after {attempts} attempt(s)")


class InvalidBlockSize(SudokuError):
    def __init__(self, N, supported):
        self.N = N
        self.supported = tuple(supported)
        sizes = ", ".join(f"{n*n}x{n*n}" for n in self.supported)
        super().__init__(f"{N*N}x{N*N} Sudoku is not supported. Please choose {sizes}.")


class IllegalMove(SudokuError):
    def __init__(self, r, c, reason):
        self.r = r
        self.c = c
        self.reason = reason
        super().__init__(f"Move at ({r}, {c}) rejected: {reason}")


class InsufficientPoints(SudokuError):
    def __init__(self, points, cost):
        self.points = points
        self.cost = cost
        super().__init__(f"Not enough points to regenerate ({points}/{cost})")
