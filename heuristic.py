import typing

from game_state import Board, Snake
from geometry import Coord, Direction


def is_safe(direction: Direction, body: typing.Sequence[Coord], board: Board,
            opponents: typing.Iterable[Snake]) -> bool:
    """
    True if moving the head of `body` one step in `direction` does not end
    the snake this turn: stays on the board, misses its own body and every
    opponent head and body segment.
    """
    if direction is Direction.NONE:
        raise ValueError("Direction.NONE is not a move")

    next_pos = body[0] + direction

    # Do not walk into walls
    if not board.in_bounds(next_pos):
        return False

    # Do not bite yourself (the neck included, so no reversing)
    if next_pos in body:
        return False

    # Do not run into other snakes
    for snake in opponents:
        if next_pos == snake.head or next_pos in snake.body:
            return False

    return True
