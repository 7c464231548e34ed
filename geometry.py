import typing
from enum import Enum


class Coord(typing.NamedTuple):
    """Grid cell. (0, 0) is the bottom-left corner, y grows upwards."""
    x: int
    y: int

    def __add__(self, other):
        if isinstance(other, Direction):
            other = other.vector
        return Coord(self.x + other[0], self.y + other[1])

    def __sub__(self, other):
        return Coord(self.x - other[0], self.y - other[1])

    @classmethod
    def from_json(cls, point: typing.Dict) -> "Coord":
        x, y = point["x"], point["y"]
        for value in (x, y):
            # bool is an int subclass but never a coordinate
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"Coordinate must be an integer, got {value!r}")
        return cls(x, y)


class Direction(Enum):
    UP = ("up", 0, 1)
    DOWN = ("down", 0, -1)
    LEFT = ("left", -1, 0)
    RIGHT = ("right", 1, 0)
    NONE = ("none", 0, 0)  # no known heading

    def __init__(self, label, dx, dy):
        self.label = label
        self.vector = Coord(dx, dy)

    @classmethod
    def from_label(cls, label: str) -> "Direction":
        for direction in cls:
            if direction.label == label:
                return direction
        raise ValueError(f"Unknown direction label: {label!r}")

    def __str__(self):
        return self.label


# Order in which candidate moves are scored; earlier wins ties.
MOVES = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)

# Order of the action mask, same as the Battlesnake action indices 0..3.
ACTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


def heading(head: Coord, neck: typing.Optional[Coord]) -> Direction:
    """
    Direction the snake moved last turn, inferred from head and neck.
    Returns Direction.NONE without a neck or when the two are not orthogonal
    neighbours.
    """
    if neck is None:
        return Direction.NONE
    delta = head - neck
    for direction in ACTIONS:
        if direction.vector == delta:
            return direction
    return Direction.NONE
