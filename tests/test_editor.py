import pytest

from itools.editor import Editor, EditorState, LineMark, line_number_rows
from itools.highlighter import document_to_html


@pytest.fixture
def statuses():
    return []


@pytest.fixture
def editor(statuses):
    return Editor(on_status=lambda message, timeout: statuses.append((message, timeout)))


def test_rows_step_by_line_height_and_mark_cursor():
    state = EditorState(block_count=3, cursor_block_number=1)
    rows = line_number_rows(state, 100)
    assert [number for number, _, _ in rows] == [1, 2, 3]
    assert [top for _, top, _ in rows] == [0, 19, 38]
    assert [mark for _, _, mark in rows] == [LineMark.NONE, LineMark.CURRENT, LineMark.NONE]


def test_rows_selected_ignore_cursor():
    state = EditorState(block_count=3, cursor_block_number=1, is_selected=True,
                        selected_block_numbers={0})
    marks = [mark for _, _, mark in line_number_rows(state, 100)]
    assert marks == [LineMark.SELECTED, LineMark.NONE, LineMark.NONE]


def test_rows_stop_at_height():
    state = EditorState(block_count=10)
    rows = line_number_rows(state, 20)
    assert len(rows) == 2


def test_rows_use_larger_line_height():
    state = EditorState(block_count=2, line_height=30)
    assert [top for _, top, _ in line_number_rows(state, 100)] == [0, 30]


def test_rows_never_smaller_than_minimum():
    state = EditorState(block_count=2, line_height=5)
    assert [top for _, top, _ in line_number_rows(state, 100)] == [0, 19]


def test_set_plain_text_updates_state(editor):
    seen = []
    editor.state_listeners.append(lambda state: seen.append(state.block_count))
    editor.set_plain_text("a\nb\nc")
    assert editor.to_plain_text() == "a\nb\nc"
    assert editor.state.block_count == 3
    assert editor.state.cursor_block_number == 0
    assert seen == [3]


def test_move_cursor_sets_block(editor):
    editor.set_plain_text("a\nb\nc")
    editor.move_cursor(4)
    assert editor.state.block_number == 2
    assert editor.state.is_selected is False


def test_select_marks_state_and_text(editor):
    editor.set_plain_text("one\ntwo")
    editor.select(0, 5)
    assert editor.selected_text() == "one\u2029t"
    assert editor.state.is_selected is True
    assert 1 in editor.state.selected_block_numbers
    editor.move_cursor(0)
    assert editor.state.selected_block_numbers == set()
    assert editor.selected_text() == ""


def test_select_out_of_range(editor):
    editor.set_plain_text("abc")
    with pytest.raises(ValueError):
        editor.select(0, 10)


def test_open_read_only_highlights(editor, tmp_path):
    path = tmp_path / "script.ps1"
    content = '# note\necho "hi"\n$x = 1'
    path.write_text(content)
    editor.open_and_parse_file(str(path))
    assert editor.to_plain_text() == content
    assert editor.highlighted_html() == document_to_html(content)
    assert editor.current_file == ""


def test_open_for_writing_auto_saves(editor, statuses, tmp_path):
    path = tmp_path / "script.ps1"
    path.write_text("ls")
    editor.open_and_parse_file(str(path), read_only=False)
    assert editor.current_file == str(path)
    assert ("Auto Saving..", 5000) in statuses
    assert path.read_text() == "ls"


def test_open_missing_file_reports(editor, statuses, tmp_path):
    missing = str(tmp_path / "missing.ps1")
    editor.open_and_parse_file(missing)
    assert statuses == [("File to open file " + missing, 10000)]
    assert editor.to_plain_text() == ""


def test_auto_save_writes_buffer(editor, tmp_path):
    path = tmp_path / "out.ps1"
    path.write_text("")
    editor.open_and_parse_file(str(path), read_only=False)
    editor.set_plain_text("echo done")
    editor.auto_save()
    assert path.read_text() == "echo done"


def test_auto_save_without_file_does_nothing(editor, statuses):
    editor.set_plain_text("echo")
    editor.auto_save()
    assert editor.current_file == ""
    assert editor.to_plain_text() == "echo"
    assert statuses == []


def test_auto_save_error_reported(editor, statuses, tmp_path):
    editor.current_file = str(tmp_path)
    editor.set_plain_text("echo")
    editor.auto_save()
    assert len(statuses) == 1
    message, timeout = statuses[0]
    assert message
    assert timeout == 10000
    assert tmp_path.is_dir()
    assert editor.to_plain_text() == "echo"


def test_key_release_ordinary_key_highlights(editor):
    editor.key_press()
    editor.set_plain_text("echo hi")
    editor.key_release("o")
    assert editor.highlighted_html() == document_to_html("echo hi")


def test_key_release_inline_replaces_current_line(editor):
    editor.set_plain_text("ls\nps")
    editor.key_release("x")
    editor.move_cursor(4)
    editor.key_release("x")
    assert editor.highlighted_html() == document_to_html("ls\nps")


def test_key_release_empty_and_undo_ignored(editor):
    editor.set_plain_text("echo")
    editor.key_release("")
    editor.key_release("\u001a")
    assert editor.highlighted_html() == ""


def test_backspace_with_deletion_highlights(editor):
    editor.set_plain_text("ab")
    editor.key_press()
    editor.set_plain_text("a")
    editor.key_release("\b")
    assert editor.highlighted_html() == document_to_html("a")


def test_backspace_without_deletion_saves(editor, statuses, tmp_path):
    path = tmp_path / "f.ps1"
    path.write_text("")
    editor.current_file = str(path)
    editor.set_plain_text("abc")
    editor.key_press()
    editor.key_release("\b")
    assert editor.highlighted_html() == ""
    assert path.read_text() == "abc"
    assert statuses[-1] == ("Auto Saving..", 5000)


def test_enter_saves(editor, tmp_path):
    path = tmp_path / "g.ps1"
    path.write_text("")
    editor.current_file = str(path)
    editor.set_plain_text("echo\n")
    editor.key_press()
    editor.key_release("\r")
    assert path.read_text() == "echo\n"


def test_key_press_remembers_text(editor):
    editor.set_plain_text("before")
    editor.key_press()
    editor.set_plain_text("after")
    assert editor.previous_text == "before"