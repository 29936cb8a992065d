"""
The catalogue of permitted shapes.

Offsets are expressed on an arbitrary unit lattice with a zero minimum row and
column. Matching rescales them to the traced path, so only the shape matters.
"""

from __future__ import annotations

from trace_types import TemplateShape, cells

__all__ = ["PERMITTED_SHAPES", "template_by_name"]


PERMITTED_SHAPES: tuple[TemplateShape, ...] = (
    TemplateShape(
        name="Triangle",
        is_closed=True,
        shape=cells((0, 0), (10, 0), (10, 10), (0, 0)),
    ),
    TemplateShape(
        name="Rhombus",
        is_closed=True,
        shape=cells((0, 7), (7, 0), (14, 7), (7, 14), (0, 7)),
    ),
    TemplateShape(
        name="M-Shape",
        is_closed=False,
        shape=cells((29, 0), (0, 0), (10, 10), (0, 20), (29, 20)),
    ),
)


def template_by_name(name: str) -> TemplateShape:
    """Look up a catalogue entry by name. Raises KeyError if unknown."""
    for template in PERMITTED_SHAPES:
        if template.name == name:
            return template
    raise KeyError(f"No permitted shape named '{name}'")
