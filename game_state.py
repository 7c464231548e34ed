import typing
from dataclasses import dataclass, field

import numpy as np

from geometry import Coord

HEAD = 5
BODY = 1


class GameStateError(ValueError):
    """Raised when a request body is not a usable Battlesnake game state."""


@dataclass(frozen=True)
class Snake:
    id: str
    body: typing.Tuple[Coord, ...]
    name: str = ""
    health: int = 100

    @property
    def head(self) -> Coord:
        return self.body[0]

    @property
    def neck(self) -> typing.Optional[Coord]:
        return self.body[1] if len(self.body) > 1 else None

    def __len__(self):
        return len(self.body)

    @classmethod
    def from_json(cls, snake: typing.Dict) -> "Snake":
        body = tuple(Coord.from_json(segment) for segment in snake["body"])
        if not body:
            raise GameStateError(f"Snake {snake.get('id')!r} has an empty body")
        return cls(
            id=str(snake["id"]),
            body=body,
            name=snake.get("name", ""),
            health=int(snake.get("health", 100)),
        )


@dataclass(frozen=True)
class Board:
    width: int
    height: int
    food: typing.FrozenSet[Coord] = frozenset()
    snakes: typing.Tuple[Snake, ...] = ()
    hazards: typing.FrozenSet[Coord] = frozenset()

    def in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord.x < self.width and 0 <= coord.y < self.height

    @classmethod
    def from_json(cls, board: typing.Dict) -> "Board":
        width, height = int(board["width"]), int(board["height"])
        if width <= 0 or height <= 0:
            raise GameStateError(f"Invalid board size {width}x{height}")
        return cls(
            width=width,
            height=height,
            food=frozenset(Coord.from_json(f) for f in board.get("food", [])),
            snakes=tuple(Snake.from_json(s) for s in board.get("snakes", [])),
            hazards=frozenset(Coord.from_json(h) for h in board.get("hazards", [])),
        )


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of one turn as sent by the game engine."""
    board: Board
    you: Snake
    turn: int = 0
    game_id: str = ""
    game: typing.Dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def opponents(self) -> typing.Tuple[Snake, ...]:
        return tuple(s for s in self.board.snakes if s.id != self.you.id)

    @classmethod
    def from_json(cls, game_state: typing.Dict) -> "GameState":
        """
        Build a snapshot from the decoded JSON of a /start, /move or /end
        request. Raises GameStateError if required fields are missing or
        malformed.
        """
        if not isinstance(game_state, dict):
            raise GameStateError("Game state must be a JSON object")
        try:
            game = game_state.get("game") or {}
            return cls(
                board=Board.from_json(game_state["board"]),
                you=Snake.from_json(game_state["you"]),
                turn=int(game_state.get("turn", 0)),
                game_id=str(game.get("id", "")),
                game=game,
            )
        except GameStateError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GameStateError(f"Malformed game state: {e!r}") from e


def game_state_to_matrix(state: GameState) -> np.ndarray:
    """
    Convert a snapshot to a (height, width, 3) int8 matrix.
    Channel 0 = food, channel 1 = you, channel 2 = all opponents
    (head=5, body=1). Row 0 is the top of the board.
    """
    board = state.board
    matrix = np.zeros((board.height, board.width, 3), dtype=np.int8)

    for food in board.food:
        if board.in_bounds(food):
            matrix[food.y, food.x, 0] = 1

    snakes = [(1, state.you)] + [(2, s) for s in state.opponents]
    for channel, snake in snakes:
        # Paint tail first so a head stacked on its body keeps the head mark
        for i, part in reversed(list(enumerate(snake.body))):
            if board.in_bounds(part):
                matrix[part.y, part.x, channel] = HEAD if i == 0 else BODY

    return np.flip(matrix, axis=0).copy()


def format_board(matrix: np.ndarray) -> str:
    """Text picture of a matrix from game_state_to_matrix, for debug logs."""
    rows = []
    for row in matrix:
        cells = []
        for food, you, other in row:
            if you == HEAD:
                cells.append("Y")
            elif you == BODY:
                cells.append("y")
            elif other == HEAD:
                cells.append("E")
            elif other == BODY:
                cells.append("e")
            elif food:
                cells.append("*")
            else:
                cells.append(".")
        rows.append(" ".join(cells))
    return "\n".join(rows)
