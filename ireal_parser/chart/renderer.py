"""Fixed-width text rendering of parsed charts.

Each bar is drawn as ``|`` plus its opening decorations and prefix
annotations, then a body of beat cells padded to at least four slots, then
suffix annotations and closing decorations. Lines hold four bars and end
with a closing ``|``.
"""

from __future__ import annotations

from ireal_parser.chart.models import Bar, Music, Slot

# Characters per beat slot
SLOT_WIDTH = 6

# Bars shorter than this many slots are padded
MIN_DISPLAY_SLOTS = 4

# Minimum body width: the slots plus the space that opens a chord cell
BODY_WIDTH = 1 + SLOT_WIDTH * MIN_DISPLAY_SLOTS

BARS_PER_LINE = 4

REPEAT_GLYPH = "%"


def _slot_text(slot: Slot) -> str:
    """Primary chord followed by any alternates in parentheses."""
    primary = [str(e.chord) for e in slot if not e.alternate]
    alternates = [f"({e.chord})" for e in slot if e.alternate]
    return "".join(primary + alternates)


def _render_slots(slots: tuple[Slot, ...]) -> str:
    cells: list[str] = []
    i = 0
    n = len(slots)

    while i < n:
        slot = slots[i]
        if not slot:
            cells.append(" " * SLOT_WIDTH)
            i += 1
            continue

        cell = " " + _slot_text(slot).rjust(SLOT_WIDTH)
        wide = any(e.width == "wide" for e in slot if not e.alternate)

        # A wide chord also covers the next slot when nothing else is there
        if wide and (i + 1 >= n or not slots[i + 1]):
            cells.append(cell + " " * SLOT_WIDTH)
            i += 2
        else:
            cells.append(cell)
            i += 1

    return "".join(cells)


def render_body(bar: Bar) -> str:
    """Render the content between a bar's decorations.

    Examples
    --------
    >>> from ireal_parser.chart.parser import parse
    >>> render_body(parse("F7 E7|").bars[0])
    '     F7           E7      '
    """
    if bar.shorthand == "measure":
        body = " " * (2 * SLOT_WIDTH) + " " + REPEAT_GLYPH
    elif bar.shorthand == "two_measures_first":
        body = (REPEAT_GLYPH + " ").rjust(BODY_WIDTH)
    elif bar.shorthand == "two_measures_second":
        body = " " + REPEAT_GLYPH
    else:
        body = _render_slots(bar.slots)
    return body.ljust(BODY_WIDTH)


def render_bar(bar: Bar) -> str:
    """Render one bar without the line's closing bar line."""
    parts = ["|"]
    if bar.double_bar_start:
        parts.append("|")
    if bar.repeat_start:
        parts.append(":")
    parts.extend(f" {annotation}" for annotation in bar.prefix)
    parts.append(render_body(bar))
    parts.extend(f" {annotation}" for annotation in bar.suffix)
    if bar.repeat_end:
        parts.append(":")
    if bar.double_bar_end:
        parts.append("|")
    return "".join(parts)


def render(music: Music, bars_per_line: int = BARS_PER_LINE) -> str:
    """Render a chart as fixed-width text.

    Parameters
    ----------
    music : Music
        The parsed chart.
    bars_per_line : int
        Bars per output line.

    Returns
    -------
    str
        One line per group of bars, each ending in ``|`` and a newline.
        Empty if the chart has no bars.

    Raises
    ------
    ValueError
        If ``bars_per_line`` is not positive.
    """
    if bars_per_line < 1:
        msg = f"bars_per_line must be positive, got {bars_per_line}"
        raise ValueError(msg)

    lines: list[str] = []
    bars = music.bars
    for start in range(0, len(bars), bars_per_line):
        row = bars[start : start + bars_per_line]
        lines.append("".join(render_bar(bar) for bar in row) + "|\n")
    return "".join(lines)
