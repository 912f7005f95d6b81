"""Error types raised by the player."""


class InvalidInput(ValueError):
    """Raised when a move is requested from a position that has no legal moves."""
