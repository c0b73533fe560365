from tests.helpers import fill_row, load_board, make_engine
from tetris_board import new_board
from tetris_events import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_LINES_CLEARED,
    EVENT_PAUSE_TOGGLED,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_SPAWNED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_STARTED,
    EVENT_TOKENS_AWARDED,
)
from tetris_piece import PieceKind


def _record(bus, *names):
    seen = []
    for name in names:
        bus.subscribe(name, lambda sender, _n=name, **k: seen.append((_n, k)))
    return seen


def test_emit_without_subscribers_is_silent():
    EventBus().emit("nothing_here", value=1)


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    got = []
    handler = lambda sender, **k: got.append(k)
    bus.subscribe("ping", handler)
    bus.emit("ping", n=1)
    bus.unsubscribe("ping", handler)
    bus.emit("ping", n=2)
    assert got == [{"n": 1}]


def test_start_and_spawn_events():
    engine = make_engine(PieceKind.T)
    seen = _record(engine.bus, EVENT_SESSION_STARTED, EVENT_PIECE_SPAWNED)
    engine.start()
    assert seen == [
        (EVENT_SESSION_STARTED, {"level": 1}),
        (EVENT_PIECE_SPAWNED, {"kind": PieceKind.T, "x": 4, "y": 0}),
    ]


def test_double_clear_emits_lock_lines_score_tokens():
    engine = make_engine(PieceKind.O)
    engine.start()
    board = new_board()
    fill_row(board, 18, gap=[4, 5])
    fill_row(board, 19, gap=[4, 5])
    load_board(engine, board)
    seen = _record(engine.bus, EVENT_PIECE_LOCKED, EVENT_LINES_CLEARED,
                   EVENT_SCORE_CHANGED, EVENT_TOKENS_AWARDED, EVENT_LEVEL_UP)
    engine.hard_drop()
    names = [n for n, _ in seen]
    assert names == [EVENT_PIECE_LOCKED, EVENT_LINES_CLEARED, EVENT_SCORE_CHANGED, EVENT_TOKENS_AWARDED]
    assert seen[0][1]["kind"] is PieceKind.O
    assert sorted(seen[0][1]["cells"]) == [(4, 18), (4, 19), (5, 18), (5, 19)]
    assert seen[1][1] == {"count": 2, "rows": [18, 19]}
    assert seen[2][1] == {"score": 100, "delta": 100}
    assert seen[3][1] == {"tokens": 1, "delta": 1}


def test_single_clear_awards_no_tokens_event():
    engine = make_engine(PieceKind.O)
    engine.start()
    board = new_board()
    fill_row(board, 19, gap=[4, 5])
    load_board(engine, board)
    seen = _record(engine.bus, EVENT_TOKENS_AWARDED, EVENT_SCORE_CHANGED)
    engine.hard_drop()
    assert seen == [(EVENT_SCORE_CHANGED, {"score": 40, "delta": 40})]


def test_level_up_event():
    engine = make_engine(PieceKind.I)
    engine.start()
    levels = _record(engine.bus, EVENT_LEVEL_UP)
    for _ in range(3):
        board = new_board()
        for y in range(16, 20):
            fill_row(board, y, gap=[5])
        load_board(engine, board)
        engine.rotate()
        engine.hard_drop()
    assert levels == [(EVENT_LEVEL_UP, {"level": 2})]


def test_pause_and_game_over_events():
    engine = make_engine(PieceKind.O)
    engine.start()
    seen = _record(engine.bus, EVENT_PAUSE_TOGGLED, EVENT_GAME_OVER)
    engine.toggle_pause()
    engine.toggle_pause()
    board = new_board()
    board[2][4] = PieceKind.S
    load_board(engine, board)
    engine.hard_drop()
    assert seen == [
        (EVENT_PAUSE_TOGGLED, {"paused": True}),
        (EVENT_PAUSE_TOGGLED, {"paused": False}),
        (EVENT_GAME_OVER, {"score": 0, "tokens": 0, "level": 1, "lines": 0}),
    ]
