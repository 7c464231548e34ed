import logging
import typing

from food import direction_score, score_food
from game_state import GameState, format_board, game_state_to_matrix
from geometry import MOVES, Direction, heading
from heuristic import is_safe

logger = logging.getLogger(__name__)

# Score of a move that kills us. Food aggregates are never negative.
UNSAFE_SCORE = -1000
# Sent to the engine when no move could be decided
FALLBACK_MOVE = Direction.UP.label


def _as_state(game_state) -> GameState:
    if isinstance(game_state, GameState):
        return game_state
    return GameState.from_json(game_state)


def score_moves(state: GameState) -> typing.List[typing.Tuple[int, Direction]]:
    """Aggregate score of each candidate move, in evaluation order."""
    you = state.you
    current_heading = heading(you.head, you.neck)
    opponents = state.opponents

    scores = []
    for direction in MOVES:
        if is_safe(direction, you.body, state.board, opponents):
            scored = score_food(state.board.food, you.head, current_heading)
            scores.append((direction_score(direction, scored, you.head), direction))
        else:
            scores.append((UNSAFE_SCORE, direction))
    return scores


def choose_move(game_state) -> str:
    """
    Pick this turn's move: the safe direction with the most food on its side,
    weighted by alignment with the current heading. Ties go to the earlier of
    left, right, up, down. A trapped snake still gets the best of the unsafe
    moves. Returns "none" only if nothing could be scored.
    """
    return best_move(score_moves(_as_state(game_state)))


def best_move(scores: typing.Sequence[typing.Tuple[int, Direction]]) -> str:
    if not scores:
        return Direction.NONE.label
    # max() keeps the first of equal scores
    _, chosen = max(scores, key=lambda s: s[0])
    return chosen.label


# API Functions

def info() -> typing.Dict:
    """
    Return snake customization options
    """
    logger.info("INFO")
    return {
        "apiversion": "1",
        "author": "rav",
        "color": "#888888",
        "head": "default",
        "tail": "default",
    }


def start(game_state: typing.Dict):
    """Called when game starts"""
    state = _as_state(game_state)
    board = state.board
    opponents = [s.name or s.id for s in state.opponents]
    logger.info(
        f"[Start] GAME START | "
        f"Game={state.game_id:<36} | "
        f"Opp={(','.join(opponents) or 'None'):<20} | "
        f"Size={board.width:>2}x{board.height:<2}"
    )


def end(game_state: typing.Dict):
    """Called when game ends"""
    state = _as_state(game_state)
    alive = {s.id for s in state.board.snakes}
    result = "won" if state.you.id in alive else "lost"
    logger.info(
        f"[End  ] GAME OVER | "
        f"Game={state.game_id:<36} | "
        f"You {result:<4} | Turn={state.turn}"
    )


def move(game_state: typing.Dict) -> typing.Dict:
    """
    Choose a move for the snake
    """
    state = _as_state(game_state)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("[Board]\n%s", format_board(game_state_to_matrix(state)))

    scores = score_moves(state)
    chosen = best_move(scores)
    if chosen == Direction.NONE.label:
        logger.warning(f"[Move ] MOVE {state.turn}: no decision, using {FALLBACK_MOVE}")
        chosen = FALLBACK_MOVE

    valid = [d.label for s, d in scores if s != UNSAFE_SCORE]
    score_str = ", ".join(f"{d.label}={s}" for s, d in scores)
    logger.info(
        f"[Move ] MOVE {state.turn}: {chosen:<5} | "
        f"Valid={(','.join(valid) or 'None'):<20} | "
        f"Scores={score_str}"
    )
    return {"move": chosen}
