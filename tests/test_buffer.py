#!/usr/bin/env python3
"""
Tests for the result buffer and base display.
"""

from cite_core.buffer import Display, ResultBuffer


def test_replace_contents_resets_point():
    buffer = ResultBuffer("*pyopl*")
    buffer.replace_contents("a\nb\nc\n")
    buffer.goto_line(3)

    buffer.replace_contents("x\ny\n")

    assert buffer.lines == ["x", "y"]
    assert buffer.point == 1
    assert buffer.line_count == 2


def test_line_outside_buffer_is_empty():
    buffer = ResultBuffer("*pyopl*")
    buffer.replace_contents("a\nb")
    assert buffer.line(1) == "a"
    assert buffer.line(2) == "b"
    assert buffer.line(0) == ""
    assert buffer.line(3) == ""


def test_forward_line_stops_at_buffer_limits():
    """Motion past either end leaves point on the first or last line."""
    buffer = ResultBuffer("*pyopl*")
    buffer.replace_contents("\n".join(str(n) for n in range(1, 9)))

    assert buffer.forward_line(4) == 0
    assert buffer.point == 5

    assert buffer.forward_line(4) == 1
    assert buffer.point == 8

    assert buffer.forward_line(-20) == 13
    assert buffer.point == 1


def test_forward_line_empty_buffer():
    buffer = ResultBuffer("*pyopl*")
    buffer.forward_line(4)
    assert buffer.point == 1


def test_display_show_keeps_other_buffers():
    display = Display()
    first, second = ResultBuffer("first"), ResultBuffer("second")

    display.show_buffer(first)
    display.show_buffer(second)
    display.show_buffer(second)

    assert display.visible == [first, second]


def test_display_close_is_idempotent():
    display = Display()
    buffer = ResultBuffer("*pyopl*")
    display.show_buffer(buffer)

    assert display.close_buffer(buffer) is True
    assert display.close_buffer(buffer) is False
    assert not display.is_visible(buffer)


def test_display_message():
    display = Display()
    display.message("Fetching 2103.00020")
    assert display.last_message == "Fetching 2103.00020"
