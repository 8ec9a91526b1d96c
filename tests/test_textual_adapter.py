from __future__ import annotations

from typing import List

from canvas_editor.adapters.textual import (
    TextualEditorAdapter,
    TextualUIHooks,
    normalize_key,
    render_snapshot,
)
from canvas_editor.buffer import LineRange, Position, RangeEnd, TextBuffer
from canvas_editor.editor import EditorSnapshot, KeyInput, TextEditor


def make_adapter(text: str = "ab\ncd"):
    views: List[EditorSnapshot] = []
    statuses: List[str] = []
    logs: List[str] = []
    hooks = TextualUIHooks(
        update_view=views.append,
        update_status=statuses.append,
        log=logs.append,
    )
    adapter = TextualEditorAdapter(TextEditor(TextBuffer.from_text(text)), hooks)
    return adapter, views, statuses, logs


def test_normalize_key() -> None:
    assert normalize_key("shift+left") == KeyInput(key="LEFT", modifiers=("SHIFT",))
    assert normalize_key("a", "a") == KeyInput(key="a", text="a")
    assert normalize_key("enter", "\r") == KeyInput(key="ENTER")
    assert normalize_key("ctrl+s", None) == KeyInput(key="s", modifiers=("CTRL",))


def test_adapter_renders_on_start_and_after_keys() -> None:
    adapter, views, statuses, logs = make_adapter()
    assert len(views) == 1
    assert views[0].caret_visible is True

    assert adapter.handle_textual_key("x", text="x") is True

    assert adapter.editor.document.text == "xab\ncd"
    assert views[-1].caret == Position(line=0, character=1)
    assert statuses[-1] == "Ln 1, Col 2"
    assert any(line.startswith("key ->") for line in logs)


def test_adapter_ignores_unknown_keys() -> None:
    adapter, views, statuses, _ = make_adapter()

    assert adapter.handle_textual_key("f5") is False

    assert statuses == []
    assert len(views) == 1


def test_blink_toggles_and_motion_resets_phase() -> None:
    adapter, views, _, _ = make_adapter()

    adapter.tick_blink()
    assert views[-1].caret_visible is False

    adapter.handle_textual_key("right")
    assert views[-1].caret_visible is True
    assert views[-1].caret == Position(line=0, character=1)


def test_blurred_editor_hides_caret_and_stops_blinking() -> None:
    adapter, views, _, _ = make_adapter()

    adapter.blur()
    rendered = len(views)
    adapter.tick_blink()

    assert views[-1].caret_visible is False
    assert len(views) == rendered

    adapter.focus()
    assert views[-1].caret_visible is True


def test_shift_motion_reaches_snapshot_ranges() -> None:
    adapter, views, _, _ = make_adapter()

    adapter.handle_textual_key("shift+down")

    assert views[-1].ranges == {
        0: LineRange(0, RangeEnd.END_OF_LINE),
        1: LineRange(0, 0),
    }


def test_render_snapshot_styles_selection_and_caret() -> None:
    snapshot = EditorSnapshot(
        version=0,
        lines=("ab\n", "cd"),
        ranges={0: LineRange(1, RangeEnd.END_OF_LINE), 1: LineRange(0, 1)},
        caret=Position(line=1, character=1),
        caret_offset=(1, 1),
        caret_visible=True,
    )

    rendered = render_snapshot(snapshot)

    assert rendered.plain == "ab \ncd "
    assert [(span.start, span.end, str(span.style)) for span in rendered.spans] == [
        (1, 3, "reverse"),
        (4, 5, "reverse"),
        (5, 6, "underline"),
    ]


def test_paste_inserts_multiline_text() -> None:
    adapter, views, statuses, _ = make_adapter()

    adapter.paste("x\ny")

    assert adapter.editor.document.snapshot() == ("x\n", "yab\n", "cd")
    assert views[-1].caret == Position(line=1, character=1)
    assert statuses[-1] == "Ln 2, Col 2"

    rendered = len(views)
    adapter.paste("")
    assert len(views) == rendered


def test_render_snapshot_places_caret_in_scrolled_viewport() -> None:
    snapshot = EditorSnapshot(
        version=0,
        lines=("ab\n", "cd\n"),
        ranges={},
        caret=Position(line=6, character=0),
        caret_offset=(0, 1),
        caret_visible=True,
        scroll_top=5,
    )

    rendered = render_snapshot(snapshot)

    assert [(span.start, span.end, str(span.style)) for span in rendered.spans] == [
        (4, 5, "underline"),
    ]
