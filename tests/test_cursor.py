from vimcore.buffer import Buffer, DocPos, ScreenPos
from vimcore.view import CursorModel, Viewport


def make_cursor(*lines: str, height: int = 23) -> CursorModel:
    buffer = Buffer(list(lines))
    return CursorModel(buffer, Viewport.for_document(buffer.len(), height))


def test_horizontal_motion_stops_at_line_bounds() -> None:
    cursor = make_cursor("abc")

    cursor.dec_x()
    assert cursor.col == 0
    for _ in range(5):
        cursor.inc_x()
    assert cursor.col == 2


def test_past_end_allows_one_extra_column() -> None:
    cursor = make_cursor("abc")

    with cursor.allow_past_end():
        cursor.move_to_end_of_line()
        assert cursor.col == 3
    assert not cursor.past_end
    cursor.clamp_x()
    assert cursor.col == 2


def test_vertical_motion_clamps_column() -> None:
    cursor = make_cursor("long line", "ab")
    cursor.move_to_end_of_line()

    cursor.inc_y()

    assert cursor.cur_line == 2
    assert cursor.col == 1
    cursor.inc_y()
    assert cursor.cur_line == 2


def test_screen_position_is_one_based() -> None:
    cursor = make_cursor("abc", "def")
    cursor.inc_y()
    cursor.inc_x()

    assert cursor.cur_pos == ScreenPos(x=2, y=2)
    assert cursor.doc_pos == DocPos(1, 1)


def test_first_char_skips_blanks() -> None:
    cursor = make_cursor("  \tfoo")

    cursor.move_to_first_char_of_line()

    assert cursor.col == 3


def test_scrolling_keeps_cursor_in_viewport() -> None:
    cursor = make_cursor(*[f"line {n}" for n in range(10)], height=3)

    for _ in range(5):
        cursor.inc_y()

    assert cursor.cur_line == 6
    assert cursor.viewport.lower_line == 3
    assert cursor.viewport.upper_line == 6
    assert cursor.cur_pos.y == 3

    cursor.goto(DocPos(0, 0))
    assert cursor.viewport.lower_line == 0
    assert cursor.viewport.upper_line == 3


def test_last_line_motion_scrolls() -> None:
    cursor = make_cursor(*[str(n) for n in range(8)], height=4)

    cursor.move_to_last_line()

    assert cursor.cur_line == 8
    assert cursor.viewport.contains(7)
    assert cursor.viewport.span == 4


def test_word_motions() -> None:
    cursor = make_cursor("foo bar", "baz")

    assert cursor.forward_to_start_of_next_word()
    assert cursor.doc_pos == DocPos(0, 4)
    assert cursor.forward_to_end_of_next_word()
    assert cursor.doc_pos == DocPos(0, 6)
    assert cursor.forward_to_start_of_next_word()
    assert cursor.doc_pos == DocPos(1, 0)
    assert cursor.backward_to_start_of_next_word()
    assert cursor.doc_pos == DocPos(0, 4)


def test_end_then_back_returns_to_word_start() -> None:
    cursor = make_cursor("alpha beta")
    cursor.goto(DocPos(0, 7))

    cursor.forward_to_end_of_next_word()
    landed = cursor.doc_pos
    cursor.backward_to_start_of_next_word()

    assert landed == DocPos(0, 9)
    assert cursor.doc_pos == DocPos(0, 6)


def test_word_motions_at_document_edges_are_noops() -> None:
    cursor = make_cursor("one two")
    cursor.goto(DocPos(0, 4))

    assert not cursor.forward_to_start_of_next_word()
    assert cursor.doc_pos == DocPos(0, 4)

    cursor.goto(DocPos(0, 0))
    assert not cursor.backward_to_start_of_next_word()
    assert cursor.doc_pos == DocPos(0, 0)


def test_new_line_splits_and_moves_down() -> None:
    cursor = make_cursor("hello")
    cursor.goto(DocPos(0, 2))

    cursor.new_line()

    assert cursor.buffer.lines() == ("he", "llo")
    assert cursor.doc_pos == DocPos(1, 0)
    assert cursor.viewport.upper_line == 2


def test_deleting_lines_slides_viewport_up() -> None:
    cursor = make_cursor(*[str(n) for n in range(6)], height=3)
    cursor.move_to_last_line()
    assert cursor.viewport.lower_line == 3

    cursor.delete_cur_line()
    cursor.delete_cur_line()

    assert cursor.buffer.len() == 4
    assert cursor.viewport.upper_line == 4
    assert cursor.viewport.lower_line == 1
    assert cursor.cur_line == 4
