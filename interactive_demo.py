"""
Interactive demo for shapetrace.
Move a cursor over the grid and trace shapes with keyboard commands.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_hud, render_level, star_string
from level_parser import parse_levels
from trace_controller import FailureReason, ShapeCommit, TraceController, TraceListener
from trace_types import GridCell, Level, Shape


class StatusListener(TraceListener):
    """Turns controller notifications into a status line."""

    def __init__(self) -> None:
        self.message = "Ready"

    def on_shape_committed(self, template_name: str, path: Shape) -> None:
        self.message = f"✓ {template_name} committed ({len(path)} cells)"

    def on_shape_rejected(self) -> None:
        self.message = "✗ Not a permitted shape, trace cleared"

    def on_goals_claimed(self, cells: frozenset[GridCell]) -> None:
        self.message += f", {len(cells)} goal(s) claimed"

    def on_trace_cancelled(self) -> None:
        self.message = "Trace discarded"

    def on_level_complete(self, stars: int) -> None:
        self.message += f"  LEVEL COMPLETE {star_string(stars)}"


class InteractiveDemo:
    """Keyboard-driven tracing on a single level."""

    def __init__(self, level: Level, name: str = "level") -> None:
        self.name = name
        self.status = StatusListener()
        self.controller = TraceController(level, self.status)
        self.console = Console()
        self.cursor = GridCell(0, 0)

    def generate_display(self) -> Panel:
        """Generate the current display with grid and status."""
        controller = self.controller
        level = controller.level

        grid_text = render_level(
            level,
            claimed=controller.claimed_goals,
            committed_paths=controller.committed_paths,
            current_path=controller.current_path,
            cursor=self.cursor,
            title=self.name,
        )

        status = Text()
        status.append("Cursor: ", style="bold")
        status.append(f"[{self.cursor.row}, {self.cursor.col}]")
        status.append("   Mode: ", style="bold")
        status.append(f"{controller.mode.value}\n\n")

        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append(
            render_hud(
                len(controller.claimed_goals),
                len(level.goal_cells),
                controller.shape_count,
                level.star_thresholds,
            )
            + "\n\n"
        )

        status.append("Keys:\n", style="bold cyan")
        status.append("  W/A/S/D - Move cursor (extends the trace while drawing)\n")
        status.append("  Space   - Press / release\n")
        status.append("  C       - Cancel trace\n")
        status.append("  R       - Reset level\n")
        status.append("  Q       - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status.message)

        return Panel(status, title="Shapetrace Interactive Demo", border_style="green", width=80)

    def move_cursor(self, d_row: int, d_col: int) -> None:
        target = GridCell(self.cursor.row + d_row, self.cursor.col + d_col)
        if not self.controller.level.in_bounds(target):
            self.status.message = "Edge of grid"
            return
        self.cursor = target

        if self.controller.is_drawing:
            failure = self.controller.extend_trace(self.controller.index.world_position(target))
            if failure is not None:
                self.status.message = f"Passing over {target.row}, {target.col} (no snap)"
            else:
                self.status.message = f"Tracing: {len(self.controller.current_path)} cells"

    def press_or_release(self) -> None:
        position = self.controller.index.world_position(self.cursor)

        if not self.controller.is_drawing:
            failure = self.controller.begin_trace(position)
            if failure is not None:
                self.status.message = f"Cannot start here: {failure.details}"
            else:
                self.status.message = "Tracing started"
            return

        result = self.controller.end_trace(position)
        if not isinstance(result, ShapeCommit) and result.reason is FailureReason.INVALID_PATH:
            self.status.message = f"Trace discarded: {result.details}"

    def reset(self) -> None:
        self.controller.reset()
        self.status.message = "Level reset"

    def run(self) -> None:
        """Run the interactive demo."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status.message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == "r":
                        self.reset()
                    elif key.lower() == "c":
                        self.controller.cancel_trace()
                    elif key == " ":
                        self.press_or_release()
                    elif key.lower() == "w":
                        self.move_cursor(-1, 0)
                    elif key.lower() == "s":
                        self.move_cursor(1, 0)
                    elif key.lower() == "a":
                        self.move_cursor(0, -1)
                    elif key.lower() == "d":
                        self.move_cursor(0, 1)
                    else:
                        self.status.message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status.message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    # Unit triangle (0,0)-(1,0)-(1,1) covers both goals
    starter="G.|.G",
    rhombus="_G_|._.|_._",
    mixed="G.._|..._|.G..|....",
)


def select_layout(levels: dict[str, Level], name: str) -> Level:
    """Look up a layout by name, listing the available ones when it is unknown."""
    if name not in levels:
        raise ValueError(
            f"Unknown layout '{name}'\n"
            f"  Available layouts: {', '.join(sorted(levels))}"
        )
    return levels[name]


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", filename="shapetrace.log")

    levels = parse_levels(LAYOUTS)
    name = sys.argv[1] if len(sys.argv) > 1 else "starter"
    try:
        level = select_layout(levels, name)
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    InteractiveDemo(level, name).run()
