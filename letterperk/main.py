"""
Main entry point for playing LetterPerk in a terminal.

Usage:
    python -m letterperk.main
    python -m letterperk.main config.yaml --mode casual --verbose
    python -m letterperk.main --show
"""

import argparse
import asyncio
import logging
import sys
from typing import Callable, List, Sequence

from .engine.constants import GRID_COLS, GRID_ROWS, MAX_WORDS_PER_GAME
from .engine.errors import GameError
from .engine.models import Tile
from .game import GameInitializer, GameSession
from .services.config import (
    AppConfig,
    build_dictionary,
    build_record_store,
    build_repositories,
    load_config,
)
from .services.share import generate_share_text
from .utils.grid_visualizer import COLUMN_LABELS, LEGEND, render_tiles


logger = logging.getLogger(__name__)

HELP = """Commands:
  a4 b3 c4       submit the word spelled by those cells (column a-c, row 1-4 from the top)
  trade a1 b2    swap those tiles for new ones (uses a trade)
  shuffle        rearrange every column
  help           show this message
  quit           leave the game"""


def parse_cells(text: str, tiles: Sequence[Tile]) -> List[str]:
    """
    Translate cell labels such as ``"a4 b3"`` into tile ids, in order.

    Raises:
        ValueError: If a label is malformed or names an empty cell
    """
    by_position = {(t.row, t.col): t for t in tiles}
    ids = []
    for label in text.lower().split():
        if len(label) != 2 or label[0] not in COLUMN_LABELS[:GRID_COLS] or not label[1].isdigit():
            raise ValueError(f"Invalid cell: {label}")
        col = COLUMN_LABELS.index(label[0])
        row = int(label[1]) - 1
        if not 0 <= row < GRID_ROWS or (row, col) not in by_position:
            raise ValueError(f"No tile at {label}")
        ids.append(by_position[(row, col)].id)
    return ids


def select_cells(session: GameSession, text: str) -> None:
    tile_ids = parse_cells(text, session.state.tiles)
    session.clear()
    for tile_id in tile_ids:
        session.select(tile_id)


def print_board(session: GameSession, output: Callable[[str], None]) -> None:
    state = session.state
    output(render_tiles(state.tiles, state.selected_tiles))
    output(
        f"Score: {state.total_score}  "
        f"Words left: {state.words_remaining}/{MAX_WORDS_PER_GAME}  "
        f"Trades: {state.trades_remaining}"
    )


async def play(session: GameSession, output: Callable[[str], None] = print) -> None:
    """Read commands until the game ends or the player quits."""
    while session.state.status == "playing":
        print_board(session, output)
        try:
            line = (await asyncio.to_thread(input, "> ")).strip()
        except EOFError:
            break

        if not line:
            continue
        if line in ("quit", "q"):
            break
        if line == "help":
            output(HELP)
            continue

        try:
            if line == "shuffle":
                session.shuffle()
            elif line.startswith("trade"):
                select_cells(session, line[len("trade"):])
                session.trade()
            else:
                select_cells(session, line)
                word = session.state.word_state
                await session.submit()
                output(f"{word.word}: +{word.score.final_score}")
        except ValueError as e:
            output(str(e))
        except GameError as e:
            session.clear()
            output(e.user_message)


async def run(config: AppConfig, show: bool = False, output: Callable[[str], None] = print) -> int:
    repositories = await build_repositories(config)
    records = build_record_store(config)
    session = GameSession(
        initializer=GameInitializer(repositories.puzzles),
        dictionary=build_dictionary(config),
        results=repositories.results,
        records=records,
    )

    try:
        try:
            state = await session.start(config.mode)
        except GameError as e:
            output(e.user_message)
            return 1

        output(f"LetterPerk {state.game_mode} puzzle {state.puzzle.date} (seed {state.puzzle.seed})")

        if show:
            output(render_tiles(state.tiles))
            output(LEGEND)
            return 0

        if config.mode == "daily":
            previous = await asyncio.to_thread(records.get_result, state.puzzle.date)
            if previous is not None:
                output(f"Already played today: {previous.score} points in {previous.word_count} words")
                return 0

        output(LEGEND)
        output(HELP)
        await play(session, output)

        if session.state.status == "gameover":
            output("")
            output(f"Final score: {session.state.total_score}")
            if session.state.error:
                output(session.state.error)
            output(generate_share_text(session.state))
        return 0
    finally:
        if repositories.engine is not None:
            await repositories.engine.dispose()


def main():
    parser = argparse.ArgumentParser(
        description="Play LetterPerk in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  database_url: sqlite+aiosqlite:///letterperk.sqlite3
  dictionary_path: words.json
  records_path: .letterperk/daily_records.json
  log_level: INFO
  mode: daily
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file (defaults apply when omitted)"
    )
    parser.add_argument(
        "--mode",
        choices=["daily", "casual"],
        help="Game mode (overrides the config file)"
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the puzzle grid and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output"
    )

    args = parser.parse_args()

    if args.config:
        try:
            config = load_config(args.config)
        except Exception as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            return 1
    else:
        config = AppConfig()

    if args.mode:
        config = config.model_copy(update={"mode": args.mode})

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    try:
        return asyncio.run(run(config, show=args.show))
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
