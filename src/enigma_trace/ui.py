import time
from typing import Iterable, Literal, Optional

from rich.console import Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from enigma_trace.alphabet import index_to_letter
from enigma_trace.models.catalog import REFLECTOR_SPECS, ROTOR_SPECS
from enigma_trace.signal_path import CharacterOutcome, PathDirection


COLORS = {
    "letter": "bold yellow",
    "positions": {
        "before": "dim",
        "after": "bright_cyan",
    },
    PathDirection.FORWARD: "green",
    PathDirection.REFLECT: "magenta",
    PathDirection.BACKWARD: "turquoise2",
}

type PositionsState = Literal["before", "after"]


def positions_to_string(positions: tuple[str, str, str], state: PositionsState) -> str:
    """Render the rotor window letters, left to right."""
    style = COLORS["positions"][state]
    return f"[{style}]{' '.join(positions)}[/{style}]"


def group_letters(text: str, size: int = 5) -> str:
    """Split text into fixed-size groups, the way messages were written down."""
    if size <= 0:
        return text
    return " ".join(text[i:i + size] for i in range(0, len(text), size))


def render(outcome: Optional[CharacterOutcome], index: int = 0, total: int = 0):
    """Render the signal path of one enciphered letter."""
    if outcome is None:
        return Panel("Waiting for first letter…", title="Signal Path", border_style="dim")

    title = (
        f"[{COLORS['letter']}]{outcome.input_letter}[/{COLORS['letter']}] → "
        f"[{COLORS['letter']}]{outcome.output_letter}[/{COLORS['letter']}]"
    )
    if total:
        title = f"Letter {index + 1} / {total}  |  {title}"

    ui_table = Table(title=title)
    ui_table.add_column("Stage", justify="right")
    ui_table.add_column("Component")
    ui_table.add_column("In", justify="center")
    ui_table.add_column("Out", justify="center")
    ui_table.add_column("Direction")

    # One table section per leg of the path: in, reflect, out.
    stage_idx = 1
    for direction in PathDirection:
        style = COLORS[direction]
        for entry in outcome.stages(direction):
            ui_table.add_row(
                str(stage_idx),
                entry.component,
                entry.input_letter,
                f"[{style}]{entry.output_letter}[/{style}]",
                f"[{style}]{entry.direction}[/{style}]",
            )
            stage_idx += 1
        if direction is not PathDirection.BACKWARD:
            ui_table.add_section()

    ui_table.caption = (
        f"Rotors {positions_to_string(outcome.positions_before, 'before')}"
        f" → {positions_to_string(outcome.positions_after, 'after')}"
    )
    return ui_table


def render_all(outcomes: Iterable[CharacterOutcome]) -> Group:
    outcomes = list(outcomes)
    return Group(*(render(outcome, i, len(outcomes)) for i, outcome in enumerate(outcomes)))


def render_catalog() -> Table:
    ui_table = Table(title="Catalog")
    ui_table.add_column("Kind")
    ui_table.add_column("Name", justify="center")
    ui_table.add_column("Wiring")
    ui_table.add_column("Notch", justify="center")

    for rotor_type, spec in ROTOR_SPECS.items():
        wiring = "".join(index_to_letter(i) for i in spec.wiring)
        ui_table.add_row("Rotor", str(rotor_type), wiring, index_to_letter(spec.notch))
    for reflector_type, spec in REFLECTOR_SPECS.items():
        wiring = "".join(index_to_letter(i) for i in spec.wiring)
        ui_table.add_row("Reflector", str(reflector_type), wiring, "")
    return ui_table


def ui_loop(outcomes: Iterable[CharacterOutcome], delay: float = 0.5) -> None:
    """Replay outcomes one letter at a time."""
    outcomes = list(outcomes)
    with Live(render(None), refresh_per_second=30, screen=False) as live:
        for i, outcome in enumerate(outcomes):
            live.update(render(outcome, i, len(outcomes)))
            time.sleep(delay)
