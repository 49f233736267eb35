"""
UCI (Universal Chess Interface) host for the chess bot.

This is the host process the engine core expects: it keeps the game position
in sync with the GUI, builds a timer for every "go", calls
SearchEngine.select_move() once per turn and reports the result.

Protocol overview:
    GUI → Engine: uci, isready, ucinewgame, setoption, position, go, stop, quit
    Engine → GUI: id name, id author, option, uciok, readyok, info, bestmove

Engine lifecycle:
    One SearchEngine plays one game. Its move history only resets when the
    engine is re-created, which happens on "ucinewgame" and whenever an
    option changes.

Threading model:
    The UCI loop runs on the main thread and must never block on the search.
    "go" starts select_move() in a daemon thread on a copy of the board; the
    main thread keeps reading stdin so that "stop" can set the stop_event.

Critical rule: NEVER print to stdout except for valid UCI responses.
Debug output goes to stderr.
"""

import sys
import os
import threading
import time

# ---------------------------------------------------------------------------
# Path setup: make 'chessbot' importable when this script is run directly
# (python interface/uci.py) from a checkout that was not pip-installed.
# ---------------------------------------------------------------------------
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import chess

from chessbot.constants import DEFAULT_MAX_DEPTH, MOVES_TO_GO
from chessbot.errors import NoLegalMoves
from chessbot.search import SearchEngine
from chessbot.timer import TurnTimer

ENGINE_NAME = "ChessBot"
MAX_DEPTH_OPTION_LIMIT = 6

# "go infinite" or no time information at all.
UNLIMITED_CLOCK_MS = 10_000_000


def _send(line: str) -> None:
    """Write one protocol line to stdout and flush it immediately."""
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic line to stderr; stdout is reserved for UCI."""
    print(message, file=sys.stderr, flush=True)


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         Current position, updated by "position" commands.
        engine:        The SearchEngine playing the current game.
        max_depth:     Value of the MaxDepth option.
        prune:         Value of the Pruning option.
        search_thread: The active search thread, or None.
        stop_event:    Shared with the search thread to stop it early.
        game_clock_ms: Our clock as first reported in this game, used as the
                       timer's total so the low-time depth rule can trigger.
    """

    def __init__(self) -> None:
        self.board: chess.Board = chess.Board()
        self.max_depth: int = DEFAULT_MAX_DEPTH
        self.prune: bool = True
        self.engine: SearchEngine = self._new_engine()
        self.search_thread: threading.Thread | None = None
        self.stop_event: threading.Event = threading.Event()
        self.game_clock_ms: int | None = None

    def _new_engine(self) -> SearchEngine:
        return SearchEngine(max_depth=self.max_depth, prune=self.prune)

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        _send(f"id name {ENGINE_NAME}")
        _send("id author ChessBot developers")
        _send(
            f"option name MaxDepth type spin default {DEFAULT_MAX_DEPTH} "
            f"min 1 max {MAX_DEPTH_OPTION_LIMIT}"
        )
        _send("option name Pruning type check default true")
        _send("uciok")

    def handle_isready(self) -> None:
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Stop any search and start a fresh game with a fresh engine."""
        self._stop_search()
        self.board = chess.Board()
        self.engine = self._new_engine()
        self.game_clock_ms = None

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Parse "setoption name <Name> value <Value>".

        Unknown options and out-of-range values are logged and ignored.
        """
        if "name" not in tokens or "value" not in tokens:
            _log(f"uci: malformed setoption: {' '.join(tokens)}")
            return
        name_idx = tokens.index("name")
        value_idx = tokens.index("value")
        name = " ".join(tokens[name_idx + 1:value_idx]).lower()
        value = " ".join(tokens[value_idx + 1:])

        if name == "maxdepth":
            try:
                depth = int(value)
            except ValueError:
                _log(f"uci: MaxDepth is not an integer: {value!r}")
                return
            self.max_depth = max(1, min(depth, MAX_DEPTH_OPTION_LIMIT))
        elif name == "pruning":
            self.prune = value.lower() == "true"
        else:
            _log(f"uci: unknown option: {name!r}")
            return

        self._stop_search()
        self.engine = self._new_engine()

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos [moves e2e4 e7e5 ...]
            position fen <FEN> [moves e2e4 e7e5 ...]
        """
        try:
            if not tokens:
                return

            if tokens[0] == "startpos":
                self.board = chess.Board()
                move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
            elif tokens[0] == "fen":
                if "moves" in tokens:
                    moves_idx = tokens.index("moves")
                    fen = " ".join(tokens[1:moves_idx])
                    move_tokens = tokens[moves_idx + 1:]
                else:
                    fen = " ".join(tokens[1:])
                    move_tokens = []
                self.board = chess.Board(fen)
            else:
                _log(f"uci: unknown position type: {tokens[0]}")
                return

            for uci_move in move_tokens:
                move = chess.Move.from_uci(uci_move)
                if move in self.board.legal_moves:
                    self.board.push(move)
                else:
                    _log(f"uci: illegal move in position command: {uci_move}")
                    break

        except ValueError as e:
            _log(f"uci: error in position command: {e}")

    def handle_go(self, tokens: list[str]) -> None:
        """
        Build a timer from the "go" parameters and search in a daemon thread.

        The board is copied so that a following "position" command cannot
        race with the search.
        """
        self._stop_search()

        timer = self._make_timer(tokens)
        self.stop_event = threading.Event()
        board_copy = self.board.copy()
        stop_event = self.stop_event
        engine = self.engine

        def search_and_reply() -> None:
            try:
                start = time.monotonic()
                move = engine.select_move(board_copy, timer, stop_event)
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))
                result = engine.last_result
                # UCI scores are from the side to move's point of view.
                score = result.score if board_copy.turn == chess.WHITE else -result.score
                _send(
                    f"info depth {result.depth} score cp {score} "
                    f"nodes {result.nodes} time {elapsed_ms}"
                )
                _send(f"bestmove {move.uci()}")
            except NoLegalMoves as e:
                _log(f"uci: {e}")
                _send("bestmove (none)")
            except Exception as e:
                _log(f"search error: {e}")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        self._stop_search()

    def handle_quit(self) -> None:
        self._stop_search()
        sys.exit(0)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _stop_search(self) -> None:
        """Signal the search thread to stop and wait (at most 2s) for it."""
        self.stop_event.set()
        if self.search_thread is not None and self.search_thread.is_alive():
            self.search_thread.join(timeout=2.0)
        self.search_thread = None

    def _make_timer(self, tokens: list[str]) -> TurnTimer:
        """
        Translate "go" parameters into a TurnTimer.

        Supports:
            movetime <ms>               — a fixed budget for this move
            wtime <ms> btime <ms> [...] — our game clock; the first value seen
                                          in a game becomes the timer's total
        Anything else (e.g. "go infinite") gets an effectively unlimited clock.
        """
        params: dict[str, int] = {}
        i = 0
        while i < len(tokens) - 1:
            key = tokens[i]
            try:
                params[key] = int(tokens[i + 1])
                i += 2
            except (ValueError, IndexError):
                i += 1

        if "movetime" in params:
            movetime = max(1, params["movetime"])
            return TurnTimer(ms_total=movetime, ms_budget=movetime)

        time_key = "wtime" if self.board.turn == chess.WHITE else "btime"
        inc_key = "winc" if self.board.turn == chess.WHITE else "binc"

        if time_key in params:
            clock = max(1, params[time_key])
            if self.game_clock_ms is None or clock > self.game_clock_ms:
                self.game_clock_ms = clock
            timer = TurnTimer(ms_total=self.game_clock_ms, ms_clock=clock)
            increment = params.get(inc_key, 0)
            if increment:
                timer.ms_budget = clock // MOVES_TO_GO + increment
            return timer

        return TurnTimer(ms_total=UNLIMITED_CLOCK_MS)


def run_uci_loop() -> None:
    """
    Main UCI loop: read commands from stdin until "quit" or EOF.

    Each command is wrapped in a try/except so that a bug in one handler
    does not take the engine down mid-game.
    """
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                _log(f"uci: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"uci: unhandled error for command {command!r}: {e}")


if __name__ == "__main__":
    run_uci_loop()
