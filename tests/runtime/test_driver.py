from __future__ import annotations

from sketchlang.config import RuntimeConfig
from sketchlang.observability import DiagnosticSink
from sketchlang.runtime import ManualScheduler, RuntimeDriver, run_source

MOVING_CIRCLE = """\
CanvasSize=(500,500)
x=0
function run():
    circle(x,300,30)
    x=x+2
    if x>500:
        x=0
"""


def make_driver(source: str, **kwargs):
    scheduler = ManualScheduler()
    driver = RuntimeDriver.from_source(source, scheduler=scheduler, **kwargs)
    return driver, scheduler


def test_moving_circle_advances_and_wraps() -> None:
    driver, scheduler = make_driver(MOVING_CIRCLE)
    frames = []
    driver.add_frame_listener(lambda frame, commands: frames.append(commands))

    assert driver.start() is True
    scheduler.step(259)

    expected = []
    x = 0
    for _ in range(260):
        expected.append(x)
        x += 2
        if x > 500:
            x = 0
    assert len(frames) == 260
    assert all(len(commands) == 1 for commands in frames)
    assert [commands[0].args[0] for commands in frames] == expected
    assert frames[250][0].args[0] == 500
    assert frames[251][0].args[0] == 0
    assert driver.canvas_size == (500, 500)
    assert len(driver.diagnostics) == 0


def test_buffer_is_cleared_every_frame() -> None:
    driver, scheduler = make_driver("function run():\n    circle(1, 1, 1)\n")

    driver.start()
    scheduler.step(4)

    assert len(driver.commands) == 1
    assert driver.state.frame == 5


def test_missing_entry_point_is_reported_once() -> None:
    driver, scheduler = make_driver("x = 1\n")

    assert driver.start() is False

    assert driver.running is False
    assert scheduler.pending == 0
    assert [d.code for d in driver.diagnostics.entries] == ["MISSING_ENTRY_POINT"]
    assert driver.diagnostics.messages() == [
        "No run() function found. Nothing to execute continuously."
    ]


def test_top_level_statements_run_once() -> None:
    printed = []
    driver, scheduler = make_driver(
        'print("setup")\nfunction run():\n    print("frame")\n',
        output=lambda values: printed.append(values[0]),
    )

    driver.start()
    scheduler.step(2)

    assert printed == ["setup", "frame", "frame", "frame"]


def test_stop_is_checked_at_top_of_tick() -> None:
    driver, scheduler = make_driver("function run():\n    circle(0, 0, 1)\n")
    driver.start()

    driver.stop()
    ran = scheduler.step(5)

    assert ran == 1
    assert driver.state.frame == 1


def test_max_frames_stops_the_loop() -> None:
    driver, scheduler = make_driver(
        "function run():\n    circle(0, 0, 1)\n", config=RuntimeConfig(max_frames=3)
    )

    driver.start()
    while scheduler.step():
        pass

    assert driver.state.frame == 3
    assert driver.running is False


def test_halt_on_error_stops_after_failing_frame() -> None:
    driver, scheduler = make_driver(
        "function run():\n    print(ghost)\n", config=RuntimeConfig(halt_on_error=True)
    )

    driver.start()
    scheduler.step(5)

    assert driver.running is False
    assert driver.state.frame == 1
    assert len(driver.diagnostics) == 1


def test_errors_do_not_halt_by_default() -> None:
    driver, scheduler = make_driver("function run():\n    print(ghost)\n")

    driver.start()
    scheduler.step(2)

    assert driver.running is True
    assert [d.frame for d in driver.diagnostics.entries] == [0, 1, 2]


def test_custom_entry_function() -> None:
    driver, scheduler = make_driver(
        "function draw():\n    circle(1, 2, 3)\n", config=RuntimeConfig(entry_function="draw")
    )

    assert driver.start() is True
    assert len(driver.commands) == 1


def test_key_state_is_visible_to_program() -> None:
    source = (
        "x = 0\n"
        "function run():\n"
        '    if keyDown("ArrowRight"):\n'
        "        x = x + 1\n"
    )
    driver, scheduler = make_driver(source)

    driver.start()
    driver.key_down("ArrowRight")
    scheduler.step(2)
    driver.key_up("ArrowRight")
    scheduler.step(2)

    assert driver.state.globals.get("x") == 2


def test_each_driver_owns_fresh_state() -> None:
    first, _ = make_driver("color(1, 2, 3)\nx = 1\nfunction run():\n    x = x + 1\n")
    first.start()
    second, _ = make_driver("function run():\n    circle(0, 0, 1)\n")
    second.start()

    assert "x" not in second.state.globals
    assert second.state.colors.top == "rgb(0,0,0)"
    assert list(second.state.functions) == ["run"]


def test_default_canvas_comes_from_config() -> None:
    driver, _ = make_driver("x = 1\n", config=RuntimeConfig(default_canvas=(320, 240)))
    driver.load()

    assert driver.canvas_size == (320, 240)


def test_frame_listener_receives_immutable_copy() -> None:
    driver, scheduler = make_driver("function run():\n    circle(0, 0, 1)\n")
    received = []
    driver.add_frame_listener(lambda frame, commands: received.append((frame, commands)))

    driver.start()
    scheduler.step()

    assert [frame for frame, _ in received] == [0, 1]
    assert all(isinstance(commands, tuple) for _, commands in received)


def test_run_source_runs_requested_frames() -> None:
    sink = DiagnosticSink()
    printed = []

    driver = run_source(
        "n = 0\nfunction run():\n    n = n + 1\n    print(n)\n",
        frames=3,
        sink=sink,
        output=lambda values: printed.append(values[0]),
    )

    assert printed == [1, 2, 3]
    assert driver.running is False
    assert driver.diagnostics is sink
