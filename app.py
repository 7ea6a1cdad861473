"""
Terminal breadboard editor.

Sketch UX flows as places, affordances and connections without leaving the
terminal. This module wires the editor core (breadboard.*) to curses:

    key press -> keymap -> Action -> ActionDispatcher -> AppState -> Renderer

Usage:
    python app.py                 # start with the demo board (or an empty one)
    python app.py flow.yaml       # open a document, or start a new one with that name
    python app.py --log-level DEBUG

Logs go to a file (config 'log_file') because curses owns the terminal.
"""

import argparse
import curses
import logging
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv

from breadboard.config import load_config
from breadboard.demo import seed_demo_data
from breadboard.dispatcher import ActionDispatcher
from breadboard.file_manager import BreadboardFileManager
from breadboard.models import Breadboard
from breadboard.navigation import select_first_place
from breadboard.paths import get_log_path
from breadboard.state import AppState
from breadboard.tui import Renderer, map_key

logger = logging.getLogger(__name__)

DEFAULT_BOARD_NAME = "My Breadboard"


def setup_logging(config: Dict[str, Any], level: Optional[str] = None) -> None:
    level_name = (level or config["log_level"]).upper()
    logging.basicConfig(
        filename=str(get_log_path(config["log_file"])),
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(config: Dict[str, Any], filename: Optional[str] = None,
               directory=None) -> Tuple[AppState, ActionDispatcher]:
    """
    Build the editor state and its dispatcher.

    Args:
        config: Loaded configuration
        filename: Document to open. A name that does not exist yet becomes the
            current file, so the first save creates it.
        directory: Directory for documents (working directory by default)

    Returns:
        (state, dispatcher) ready for the main loop
    """
    file_manager = BreadboardFileManager(directory, extension=config["file_extension"])
    board = Breadboard.new(DEFAULT_BOARD_NAME)
    if filename is None and config["seed_demo"]:
        seed_demo_data(board)

    state = AppState(board, list_files=file_manager.list_breadboard_files)
    dispatcher = ActionDispatcher(state, file_manager, config)
    select_first_place(state.board, state.nav)

    if filename is not None:
        filename = file_manager.with_extension(filename)
        if file_manager.file_exists(filename):
            dispatcher.open_file(filename)
        else:
            state.current_file = filename
            state.status_message = f"New file {filename}"
            logger.info(f"Starting new breadboard {filename}")

    return state, dispatcher


def run(stdscr, state: AppState, dispatcher: ActionDispatcher, poll_interval_ms: int) -> None:
    """Render, poll for one key, dispatch; until the quit flag is set."""
    # Raw mode so Ctrl+S / Ctrl+Q / Ctrl+C reach the editor
    curses.raw()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    stdscr.timeout(poll_interval_ms)
    curses.set_escdelay(25)

    renderer = Renderer(stdscr)
    while not state.should_quit:
        renderer.draw(state)
        try:
            key = stdscr.get_wch()
        except curses.error:
            # Poll timed out with no input
            continue
        if key == curses.KEY_RESIZE:
            continue
        action = map_key(key, state.mode, searching=state.is_searching_places)
        dispatcher.dispatch(action)

    logger.info("Quit requested")


def main() -> None:
    parser = argparse.ArgumentParser(description="Terminal editor for breadboard UX flows")
    parser.add_argument("file", nargs="?", help="breadboard document to open")
    parser.add_argument("--log-level", help="override the configured log level (e.g. DEBUG)")
    args = parser.parse_args()

    load_dotenv()
    config = load_config()
    setup_logging(config, args.log_level)
    logger.info("Starting breadboard editor")

    state, dispatcher = create_app(config, args.file)
    curses.wrapper(run, state, dispatcher, config["poll_interval_ms"])


if __name__ == "__main__":
    main()
