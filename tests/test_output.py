import pytest

from rmdb.defs import BUFFER_LENGTH
from rmdb.output import RECORD_COUNT_LENGTH, Context, RecordPrinter


def test_new_context_is_empty():
    context = Context()
    assert context.text() == ""
    assert context.offset == 0
    assert context.ellipsis is False


@pytest.mark.parametrize("num_cols", [1, 3])
def test_separator_shape(num_cols):
    context = Context()
    RecordPrinter(num_cols).print_separator(context)
    text = context.text()
    assert text.endswith("+\n")
    line = text[:-1]
    assert line.count("+") == num_cols + 1
    assert set(line) == {"+", "-"}
    segments = line.split("+")[1:-1]
    assert all(len(seg) == RecordPrinter.COL_WIDTH + 2 for seg in segments)


def test_record_cells_align_with_separator():
    context = Context()
    printer = RecordPrinter(2)
    printer.print_separator(context)
    printer.print_record(["id", "name"], context)
    sep_line, row_line, _ = context.text().split("\n")
    assert len(sep_line) == len(row_line)
    cells = row_line.split("|")[1:-1]
    assert [cell.strip() for cell in cells] == ["id", "name"]
    assert all(cell.startswith(" ") and cell.endswith(" ") for cell in cells)
    assert all(len(cell) == RecordPrinter.COL_WIDTH + 2 for cell in cells)


def test_values_are_right_aligned():
    context = Context()
    RecordPrinter(1).print_record(["x"], context)
    cell = context.text().split("|")[1]
    assert cell.rstrip().endswith("x")
    assert cell.startswith(" " * (RecordPrinter.COL_WIDTH - 1))


def test_long_value_is_truncated():
    value = "abcdefghijklmnopqrstuvwxyz"
    context = Context()
    RecordPrinter(1).print_record([value], context)
    shown = context.text().split("|")[1].strip()
    assert len(shown) == RecordPrinter.COL_WIDTH
    assert shown.endswith("...")
    assert value.startswith(shown[:-3])


def test_wrong_value_count_raises():
    with pytest.raises(ValueError):
        RecordPrinter(2).print_record(["only one"], Context())


def test_zero_columns_rejected():
    with pytest.raises(ValueError):
        RecordPrinter(0)


def test_record_count_footer():
    context = Context()
    RecordPrinter.print_record_count(5, context)
    assert context.text() == "Total record(s): 5\n"


def test_overflow_sets_ellipsis_and_keeps_room():
    context = Context()
    printer = RecordPrinter(1)
    for i in range(1000):
        printer.print_record([str(i)], context)
    assert context.ellipsis is True
    assert context.offset + RECORD_COUNT_LENGTH < BUFFER_LENGTH
    before = context.offset
    printer.print_record(["more"], context)
    assert context.offset == before
    RecordPrinter.print_record_count(1000, context)
    assert context.text().endswith("... ...\nTotal record(s): 1000\n")
    assert context.offset < BUFFER_LENGTH