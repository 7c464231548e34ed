import typing

from geometry import Coord, Direction

AHEAD = 3  # on the line we are already moving along
ON_AXIS = 2  # same row or column, needs a turn
OFF_AXIS = 1


class ScoredFood(typing.NamedTuple):
    x: int
    y: int
    priority: int


def score_food(food: typing.Iterable[Coord], head: Coord,
               heading: Direction) -> typing.Iterator[ScoredFood]:
    """
    Rate every food item relative to the head. Food straight ahead along the
    current heading rates AHEAD, food in the same row or column ON_AXIS and
    anything else OFF_AXIS.

    This is a generator: call it again for every pass over the food.
    """
    for f in food:
        if f.y == head.y:
            ahead = ((f.x > head.x and heading is Direction.RIGHT)
                     or (f.x < head.x and heading is Direction.LEFT))
            yield ScoredFood(f.x, f.y, AHEAD if ahead else ON_AXIS)
        elif f.x == head.x:
            ahead = ((f.y > head.y and heading is Direction.UP)
                     or (f.y < head.y and heading is Direction.DOWN))
            yield ScoredFood(f.x, f.y, AHEAD if ahead else ON_AXIS)
        else:
            yield ScoredFood(f.x, f.y, OFF_AXIS)


def _lies_towards(direction: Direction, item: ScoredFood, head: Coord) -> bool:
    if direction is Direction.LEFT:
        return item.x < head.x
    if direction is Direction.RIGHT:
        return item.x > head.x
    if direction is Direction.UP:
        return item.y > head.y
    if direction is Direction.DOWN:
        return item.y < head.y
    return False


def direction_score(direction: Direction, scored: typing.Iterable[ScoredFood],
                    head: Coord) -> int:
    """Sum of the priorities of all food strictly on `direction`'s side of the head."""
    return sum(item.priority for item in scored if _lies_towards(direction, item, head))
