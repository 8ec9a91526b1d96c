from __future__ import annotations

import random
from typing import List

from canvas_editor.buffer import (
    ActiveSide,
    LineRange,
    Position,
    RangeEnd,
    SelectionChange,
    TextBuffer,
)
from canvas_editor.selection import SelectionEngine

EOL = RangeEnd.END_OF_LINE


def make_engine(text: str = "Line1\nLine2\nLine3") -> SelectionEngine:
    return SelectionEngine(TextBuffer.from_text(text))


def test_initial_state() -> None:
    engine = make_engine()

    assert engine.position == Position(line=0, character=0)
    assert engine.is_empty()
    assert engine.active_side is ActiveSide.END
    assert engine.visible is False
    assert engine.line_ranges() == {}


def test_move_cursor_clockwise() -> None:
    engine = make_engine()

    engine.move_right(1)
    assert engine.position == Position(line=0, character=1)

    engine.move_down(1)
    assert engine.position == Position(line=1, character=1)

    engine.move_left(1)
    assert engine.position == Position(line=1, character=0)

    engine.move_up()
    assert engine.position == Position(line=0, character=0)


def test_respects_document_bounds() -> None:
    engine = make_engine()

    engine.move_up(1)
    assert engine.position == Position(line=0, character=0)

    engine.move_left(1)
    assert engine.position == Position(line=0, character=0)

    engine.set_position(5, 2)
    engine.move_right(1)
    assert engine.position == Position(line=2, character=5)

    engine.move_down(3)
    assert engine.position == Position(line=2, character=5)


def test_wraps_between_lines_horizontally() -> None:
    engine = make_engine()

    engine.move_down(1)
    engine.move_left(1)
    assert engine.position == Position(line=0, character=5)

    engine.move_right(1)
    assert engine.position == Position(line=1, character=0)


def test_vertical_move_clamps_to_shorter_line_without_wrapping() -> None:
    engine = make_engine("Line1\n\nLine3")

    engine.set_position(4, 0)
    engine.move_down()

    assert engine.position == Position(line=1, character=0)


def test_extending_selection_produces_line_ranges() -> None:
    engine = make_engine()

    engine.move_right(1)
    engine.move_right(2, True)
    assert engine.focus == Position(line=0, character=3)
    assert engine.line_ranges() == {0: LineRange(1, 3)}

    engine.move_down(1, True)
    assert engine.line_ranges() == {0: LineRange(1, EOL), 1: LineRange(0, 3)}

    engine.move_left(3, True)
    assert engine.line_ranges() == {0: LineRange(1, EOL), 1: LineRange(0, 0)}

    engine.move_left(1, True)
    assert engine.line_ranges() == {0: LineRange(1, 5)}


def test_extending_left_from_collapsed_moves_start() -> None:
    engine = make_engine()
    engine.set_position(3, 0)

    engine.move_left(1, True)
    assert engine.active_side is ActiveSide.START
    assert engine.anchor == Position(line=0, character=2)
    assert engine.focus == Position(line=0, character=3)
    assert engine.position == engine.anchor

    engine.move_left(1, True)
    assert engine.anchor == Position(line=0, character=1)


def test_crossing_the_other_endpoint_swaps_and_flips() -> None:
    engine = make_engine()
    engine.set_position(3, 0)
    engine.move_left(2, True)

    engine.move_right(5, True)

    assert engine.anchor == Position(line=0, character=3)
    assert engine.focus == Position(line=1, character=0)
    assert engine.active_side is ActiveSide.END
    assert engine.position == Position(line=1, character=0)


def test_extending_above_anchor_line_moves_start() -> None:
    engine = make_engine()
    engine.set_position(2, 1)
    engine.set_position(4, 1, True)

    engine.move_up(1, True)

    assert engine.active_side is ActiveSide.START
    assert engine.anchor == Position(line=0, character=4)
    assert engine.focus == Position(line=1, character=4)


def test_plain_move_collapses_selection() -> None:
    engine = make_engine()
    engine.move_right(3, True)
    assert not engine.is_empty()

    engine.move_down()

    assert engine.is_empty()
    assert engine.active_side is ActiveSide.END
    assert engine.position == Position(line=1, character=3)


def test_anchor_never_passes_focus() -> None:
    text = "alpha\n\nbeta gamma\nd\n"
    doc = TextBuffer.from_text(text)
    engine = SelectionEngine(doc)
    rng = random.Random(7)

    for _ in range(300):
        engine.set_position(rng.randint(-3, 12), rng.randint(-2, 6), rng.random() < 0.6)

        assert engine.anchor <= engine.focus
        for point in (engine.anchor, engine.focus):
            assert 0 <= point.line < doc.line_count
            assert 0 <= point.character <= doc.content_length(point.line)


def test_observers_receive_changes() -> None:
    engine = make_engine()
    changes: List[SelectionChange] = []
    engine.subscribe(changes.append)

    returned = engine.move_right(2, True)

    assert changes == [returned]
    assert changes[0].engine is engine
    assert changes[0].anchor == Position(line=0, character=0)
    assert changes[0].focus == Position(line=0, character=2)

    engine.unsubscribe(changes.append)
    engine.move_right()
    assert len(changes) == 1


def test_attach_repoints_and_collapses() -> None:
    engine = make_engine()
    engine.set_position(5, 2)
    replacement = TextBuffer.from_text("x")

    engine.attach(replacement)

    assert engine.document is replacement
    assert engine.position == Position(line=0, character=0)
    engine.move_right(4)
    assert engine.position == Position(line=0, character=1)


def test_motion_in_empty_document() -> None:
    engine = SelectionEngine(TextBuffer())

    engine.move_right()
    engine.move_down()
    engine.move_left(2, True)

    assert engine.position == Position(line=0, character=0)
    assert engine.is_empty()


def test_visibility_flag() -> None:
    engine = make_engine()

    engine.set_visible(True)

    assert engine.visible is True


def test_line_range_resolves_end_of_line() -> None:
    assert LineRange(1, EOL).resolve(5) == (1, 5)
    assert LineRange(1, EOL).to_end_of_line is True
    assert LineRange(0, 3).resolve(9) == (0, 3)
    assert LineRange(0, 3).to_end_of_line is False
