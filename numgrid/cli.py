"""
Numgrid CLI - Command-line interface for the engine.

Usage:
    numgrid play [options]     Play a hot-seat game in the terminal
    numgrid board [options]    Print a freshly generated board
    numgrid serve              Run the HTTP API with uvicorn

Options shared by play and board:
    --width, --height          Board size (default 12x12)
    --board-die FACES          One die for number tiles, e.g. 1,2,3,4,5,6 (repeatable)
    --length-die FACES         One die for move size (repeatable)
    --total-die FACES          One die for move target (repeatable)
    --settings QUERY           URL-style settings, e.g. "width=8&boardDice=1,2,3"
    --seed N                   Seed for a reproducible game
"""

import argparse
import logging
import random
import sys

from .engine_core.game import Game
from .engine_core.state import Cell, Player
from .settings import ConfigurationError, GameSettings, merge_with_defaults, parse_query_string

OWNER_MARKS = {None: " ", Player.FIRST: "A", Player.SECOND: "B"}

HELP_TEXT = """Commands:
  s ROW COL   select a cell
  d ROW COL   deselect a cell and everything after it
  r           reset the selection
  c           confirm the move
  p           pass (asks first)
  q           quit"""


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Numgrid - Arithmetic Territory Game",
        prog="numgrid",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log engine events")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    _add_settings_arguments(play_parser)

    board_parser = subparsers.add_parser("board", help="Print a generated board")
    _add_settings_arguments(board_parser)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "board":
        cmd_board(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def _add_settings_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--board-die", action="append", dest="board_dice", metavar="FACES")
    parser.add_argument("--length-die", action="append", dest="move_length_dice", metavar="FACES")
    parser.add_argument("--total-die", action="append", dest="move_total_dice", metavar="FACES")
    parser.add_argument("--player1", help="Name of the player on the top row")
    parser.add_argument("--player2", help="Name of the player on the bottom row")
    parser.add_argument("--settings", help="URL-style settings query string")
    parser.add_argument("--seed", type=int)


def parse_faces(text: str) -> list[int]:
    """Parse "1,2,3" into [1, 2, 3]."""
    try:
        return [int(face) for face in text.split(",") if face.strip()]
    except ValueError:
        raise ConfigurationError([f"die faces must be integers, got {text!r}"])


def build_settings(args) -> GameSettings:
    """Merge CLI flags over the query string (if any) over the defaults."""
    base = parse_query_string(args.settings) if args.settings else GameSettings()
    overrides = base.model_dump()

    for name in ("width", "height"):
        if getattr(args, name) is not None:
            overrides[name] = getattr(args, name)

    for name in ("board_dice", "move_length_dice", "move_total_dice"):
        dice = getattr(args, name)
        if dice:
            overrides[name] = [parse_faces(d) for d in dice]

    names = list(overrides["player_names"])
    if args.player1:
        names[0] = args.player1
    if args.player2:
        names[1] = args.player2
    overrides["player_names"] = names

    return merge_with_defaults(overrides)


def _new_game(args) -> Game:
    try:
        settings = build_settings(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(2)
    return Game(settings=settings, rng=random.Random(args.seed))


# =============================================================================
# Rendering
# =============================================================================

def render_cell(game: Game, cell: Cell) -> str:
    """Four characters: owner mark, symbol, then '*' selected or '.' selectable."""
    if cell.selected:
        suffix = "*"
    elif game.is_possible(cell.row, cell.col):
        suffix = "."
    else:
        suffix = " "
    return f"{OWNER_MARKS[cell.owner]}{str(cell.symbol):>2}{suffix}"


def render_board(game: Game) -> str:
    lines = ["    " + "".join(f"{col:>3} " for col in range(game.board.width))]
    for index, row in enumerate(game.board.rows):
        lines.append(f"{index:>3} " + "".join(render_cell(game, cell) for cell in row))
    return "\n".join(lines)


def render_status(game: Game) -> str:
    scores = " | ".join(
        f"{OWNER_MARKS[player]} {game.player_name(player)}: {game.current_scores[player]}"
        for player in Player
    )
    if game.is_over:
        if game.winner is None:
            return f"{scores}\nGame over: draw"
        return f"{scores}\nGame over: {game.player_name(game.winner)} wins"

    move = game.current_move
    selection = game.current_selection
    lines = [
        scores,
        f"Move {move.number}: {game.player_name(move.player)} ({OWNER_MARKS[move.player]})"
        f" must make {move.target} using up to {move.size} new tile(s)",
    ]
    if not selection.is_empty:
        marker = "valid" if game.is_selection_valid else "not valid"
        lines.append(
            f"Selection: {game.expression} = {selection.total}"
            f" [{len(game.new_selected_cells())}/{move.size} new, {marker}]"
        )
    return "\n".join(lines)


# =============================================================================
# Input
# =============================================================================

def handle_command(game: Game, line: str, confirm=None) -> tuple[str, bool]:
    """
    Translate one line of input into an engine command.

    Args:
        game: Game to drive
        line: User input
        confirm: Callable asked before passing; returns True to go ahead

    Returns:
        (message for the user, whether to keep playing)
    """
    parts = line.strip().lower().split()
    if not parts:
        return "", True

    command, rest = parts[0], parts[1:]

    if command in ("q", "quit"):
        return "Bye.", False

    if command in ("s", "select", "d", "deselect"):
        if len(rest) != 2 or not all(p.isdigit() for p in rest):
            return f"Usage: {command} ROW COL", True
        row, col = int(rest[0]), int(rest[1])
        if command.startswith("s"):
            changed = game.select_cell(row, col)
            return ("" if changed else f"Cannot select {row},{col}"), True
        changed = game.deselect_cell(row, col)
        return ("" if changed else f"{row},{col} is not selected"), True

    if command in ("r", "reset"):
        game.reset_selection()
        return "Selection cleared.", True

    if command in ("c", "confirm"):
        if not game.confirm_move():
            return "Selection is not valid.", True
        record = game.move_history[-1]
        message = f"Claimed {len(record.claimed)} tile(s) with {record.expression}."
        if record.pruned:
            message += f" {len(record.pruned)} opposing tile(s) cut off."
        return message, not game.is_over

    if command in ("p", "pass"):
        if confirm is not None and not confirm():
            return "Pass cancelled.", True
        game.pass_move()
        return "Move passed.", True

    return HELP_TEXT, True


def _ask_pass() -> bool:
    answer = input("Are you sure you want to pass your turn? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def cmd_play(args):
    """Hot-seat game in the terminal."""
    game = _new_game(args)
    print(HELP_TEXT)

    keep_going = True
    while keep_going:
        print()
        print(render_board(game))
        print(render_status(game))
        try:
            line = input("> ")
        except EOFError:
            break
        message, keep_going = handle_command(game, line, confirm=_ask_pass)
        if message:
            print(message)

    if game.is_over:
        print()
        print(render_board(game))
        print(render_status(game))


def cmd_board(args):
    """Print a freshly generated board."""
    game = _new_game(args)
    print(render_board(game))
    print(render_status(game))


def cmd_serve(args):
    """Run the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
