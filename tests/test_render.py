import io

from tilecollapse.core.grid import Grid
from tilecollapse.io.render import CLEAR_SCREEN, TerminalRenderer, render_grid


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_render_grid_uses_glyphs_and_placeholder(directed_pair_rules):
    grid = Grid(directed_pair_rules, 2, 2)
    grid.collapse_cell((0, 0), "A")
    grid.collapse_cell((1, 1), "B")
    assert render_grid(grid) == "a.\n.b"
    assert render_grid(grid, placeholder="?") == "a?\n?b"


def test_renderer_throttles_frames(single_tile_rules):
    clock = FakeClock()
    out = io.StringIO()
    renderer = TerminalRenderer(stream=out, min_interval=1.0, clear=False, clock=clock)
    grid = Grid(single_tile_rules, 1, 2)

    renderer(grid)
    clock.now = 0.5
    renderer(grid)
    clock.now = 1.2
    grid.collapse_cell((0, 0), "x")
    renderer(grid)

    assert renderer.frames == 2
    assert out.getvalue() == "..\n#.\n"


def test_renderer_clears_and_sleeps(single_tile_rules):
    slept = []
    out = io.StringIO()
    renderer = TerminalRenderer(stream=out, delay=0.01, sleep=slept.append)
    grid = Grid(single_tile_rules, 1, 1)
    renderer(grid)
    assert out.getvalue() == CLEAR_SCREEN + ".\n"
    assert slept == [0.01]


def test_final_frame_is_never_throttled(single_tile_rules):
    out = io.StringIO()
    renderer = TerminalRenderer(stream=out, min_interval=60.0, clear=False, clock=FakeClock())
    grid = Grid(single_tile_rules, 1, 1)
    renderer(grid)
    grid.collapse_cell((0, 0), "x")
    renderer(grid)
    renderer.final(grid)
    assert out.getvalue() == ".\n#\n"
    assert renderer.frames == 2
