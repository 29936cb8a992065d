"""
Level configuration loading for shapetrace.

Provides two ways to build a Level:
1. Text format with one character per lattice cell
2. Structured record (dict) as delivered by an external level source
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from trace_types import GridCell, Level, StarThresholds

__all__ = ["level_from_config", "parse_level", "parse_levels"]


# Cell characters: (is_interactable, is_goal)
CELL_CHARS: dict[str, tuple[bool, bool]] = {
    ".": (True, False),
    "G": (True, True),
    "g": (False, True),
    "_": (False, False),
}


def parse_level(
    definition: str,
    cell_spacing: float = 100.0,
    star_thresholds: StarThresholds | None = None,
) -> Level:
    """
    Parse a level from a compact string format.

    Format:
    - Rows separated by |
    - One character per cell, row 0 first:
      * '.': Interactable point
      * 'G': Interactable goal point
      * 'g': Goal point the trace cannot snap to (covered only by a segment)
      * '_': Blank (not interactable, not a goal)
    - Whitespace around the whole definition is ignored

    Example:
        ".G.|...|G.."
        Creates a 3x3 level, every cell interactable, goals at (0, 1) and (2, 0)

    Args:
        definition: The level string
        cell_spacing: World distance between neighbouring cells
        star_thresholds: Shape counts for each star rating (default 1 / 2)

    Returns:
        The parsed Level

    Raises:
        ValueError: On unknown characters, inconsistent row lengths or a
            non-positive cell spacing
    """
    if cell_spacing <= 0:
        raise ValueError(
            f"Invalid cell spacing: {cell_spacing}\n"
            f"  Cell spacing must be positive"
        )

    row_strings = definition.strip().split("|")
    interactable: set[GridCell] = set()
    goals: set[GridCell] = set()

    for row_idx, row_str in enumerate(row_strings):
        for col_idx, char in enumerate(row_str):
            if char not in CELL_CHARS:
                raise ValueError(
                    f"Invalid character '{char}' in level definition\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters:\n"
                    f"    - '.': Interactable point\n"
                    f"    - 'G': Interactable goal point\n"
                    f"    - 'g': Non-interactable goal point\n"
                    f"    - '_': Blank cell"
                )
            is_interactable, is_goal = CELL_CHARS[char]
            cell = GridCell(row_idx, col_idx)
            if is_interactable:
                interactable.add(cell)
            if is_goal:
                goals.add(cell)

    cols = len(row_strings[0])
    mismatched = [(i, len(row)) for i, row in enumerate(row_strings) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in level definition\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    if cols == 0:
        raise ValueError("Empty level definition")

    return Level(
        rows=len(row_strings),
        cols=cols,
        cell_spacing=cell_spacing,
        interactable_cells=frozenset(interactable),
        goal_cells=frozenset(goals),
        star_thresholds=star_thresholds if star_thresholds is not None else StarThresholds(),
    )


def parse_levels(definitions: dict[str, str], cell_spacing: float = 100.0) -> dict[str, Level]:
    """Parse several named level definitions with parse_level."""
    return {name: parse_level(definition, cell_spacing) for name, definition in definitions.items()}


def _get(config: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in config:
        return config[camel]
    if snake in config:
        return config[snake]
    if default is not None:
        return default
    raise ValueError(f"Level configuration is missing '{camel}'")


def _to_cell(value: Any, key: str, index: int) -> GridCell:
    # Accepts GridCell, {"row": r, "col": c} or (row, col)
    if isinstance(value, GridCell):
        return value
    try:
        if isinstance(value, Mapping):
            return GridCell(int(value["row"]), int(value["col"]))
        row, col = value
        return GridCell(int(row), int(col))
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(
            f"Invalid cell in '{key}'\n"
            f"  Entry {index}: {value!r}\n"
            f"  Expected {{\"row\": r, \"col\": c}} or a (row, col) pair"
        ) from e


def _to_cells(config: Mapping[str, Any], camel: str, snake: str) -> frozenset[GridCell]:
    entries = _get(config, camel, snake, ())
    return frozenset(_to_cell(v, camel, i) for i, v in enumerate(entries))


def level_from_config(config: Mapping[str, Any]) -> Level:
    """
    Build a Level from a structured configuration record.

    Recognised keys (camelCase or snake_case):
        rows, cols, cellSpacing, interactableCells, goalCells, starThresholds

    starThresholds may be a mapping with threeStars/twoStars, a
    (three, two) pair, or omitted for the defaults.

    Raises:
        ValueError: On missing keys, non-positive sizes or out-of-bounds cells
    """
    rows = int(_get(config, "rows", "rows"))
    cols = int(_get(config, "cols", "cols"))
    cell_spacing = float(_get(config, "cellSpacing", "cell_spacing"))
    if rows <= 0 or cols <= 0 or cell_spacing <= 0:
        raise ValueError(
            f"Invalid level dimensions: rows={rows}, cols={cols}, cellSpacing={cell_spacing}\n"
            f"  All must be positive"
        )

    interactable = _to_cells(config, "interactableCells", "interactable_cells")
    goals = _to_cells(config, "goalCells", "goal_cells")

    thresholds_raw = config.get("starThresholds", config.get("star_thresholds"))
    if thresholds_raw is None:
        thresholds = StarThresholds()
    elif isinstance(thresholds_raw, StarThresholds):
        thresholds = thresholds_raw
    elif isinstance(thresholds_raw, Mapping):
        thresholds = StarThresholds(
            int(_get(thresholds_raw, "threeStars", "three_stars")),
            int(_get(thresholds_raw, "twoStars", "two_stars")),
        )
    else:
        three, two = thresholds_raw
        thresholds = StarThresholds(int(three), int(two))

    level = Level(rows, cols, cell_spacing, interactable, goals, thresholds)
    _check_in_bounds(level, "interactableCells", interactable)
    _check_in_bounds(level, "goalCells", goals)
    return level


def _check_in_bounds(level: Level, key: str, cells: Iterable[GridCell]) -> None:
    outside = sorted(c for c in cells if not level.in_bounds(c))
    if outside:
        listed = ", ".join(f"({c.row}, {c.col})" for c in outside)
        raise ValueError(
            f"Cells in '{key}' lie outside the {level.rows}x{level.cols} grid\n"
            f"  Offending cells: {listed}"
        )
