import io

from chilab.adapter_stdio import StdioAdapter
from chilab.puzzles import PuzzleConfig
from chilab.session import PuzzleSession
from chilab.types import Pos


def _session():
    config = PuzzleConfig(name="four", piece_count=4, grid_width=6, grid_height=6)
    return PuzzleSession(config, [Pos(1, 2), Pos(4, 4), Pos(4, 0), Pos(1, 1)])


def _run_adapter_with_lines(lines, adapter: StdioAdapter):
    stdin = io.StringIO("\n".join(lines) + "\n")
    stdout = io.StringIO()
    stderr = io.StringIO()
    adapter.stdin = stdin
    adapter.stdout = stdout
    adapter.stderr = stderr
    exit_code = adapter.run()
    return exit_code, stdout.getvalue().strip().splitlines(), stderr.getvalue().strip()


def test_queries_and_moves():
    adapter = StdioAdapter(_session())
    lines = ["STATE", "GROUP 3", "PROGRESS", "DRAG 0 3 3", "MOVE 1 3 3", "STATE", "QUIT", "STATE"]
    code, out, err = _run_adapter_with_lines(lines, adapter)
    assert code == 0
    assert out == [
        "OK 1,2,4,4,4,0,1,1",
        "OK 3 0",
        "OK groups=3 disconnections=3 overlaps=0 unsolved",
        "OK moved 0 3",
        "OK moved 0 1",
        "OK 4,4,3,3,4,0,3,2",
    ]
    assert "drag piece=0" in err


def test_ignored_drop_reports_nothing_moved():
    adapter = StdioAdapter(_session(), quiet=True)
    code, out, err = _run_adapter_with_lines(["MOVE 2 9 9", "MOVE 2 4 0"], adapter)
    assert code == 0
    assert out == ["OK moved", "OK moved"]
    assert err == ""


def test_load_and_board():
    adapter = StdioAdapter(_session())
    code, out, _ = _run_adapter_with_lines(["LOAD 0,0,2,0,4,0,0,2", "BOARD"], adapter)
    assert code == 0
    assert out[0] == "OK"
    assert out[1] == " 0  .  1  .  2  ."
    assert out[3] == " 3  .  .  .  .  ."
    assert len(out) == 8
    assert out[-1] == "OK"


def test_new_with_seed_is_reproducible():
    first = StdioAdapter(_session())
    second = StdioAdapter(_session())
    _, out_a, _ = _run_adapter_with_lines(["NEW 11"], first)
    _, out_b, _ = _run_adapter_with_lines(["NEW 11"], second)
    assert out_a == out_b
    assert out_a[0].startswith("OK ")


def test_invalid_state_stops_processing():
    session = _session()
    adapter = StdioAdapter(session)
    code, out, err = _run_adapter_with_lines(["LOAD 0,0,0,0", "STATE"], adapter)
    assert code == 1
    assert out == ["ERROR state is not a valid layout"]
    assert "ERROR" in err
    assert session.encode() == "1,2,4,4,4,0,1,1"


def test_bad_arguments_are_errors():
    for line, message in [
        ("MOVE 9 1 1", "piece must be between 0 and 3"),
        ("MOVE 1 x 1", "x must be an integer"),
        ("DRAG 1 1", "DRAG requires a piece and x y coordinates"),
        ("GROUP", "GROUP requires a piece"),
        ("JUMP", "Unknown command 'JUMP'"),
    ]:
        code, out, _ = _run_adapter_with_lines([line], StdioAdapter(_session(), quiet=True))
        assert code == 1
        assert out == [f"ERROR {message}"]
