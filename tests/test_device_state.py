"""Tests for the double-buffered device state."""

from unittest.mock import Mock

import pytest

from launchemu.emulator import DeviceState, brightness_for_level
from launchemu.exceptions import ProtocolError
from launchemu.models import (
    AMBER,
    BLACK,
    GREEN,
    OFF_COLOR,
    RED,
    BackBufferOperation,
    BufferId,
    Color,
    ScrollSpeed,
)
from launchemu.protocols import DeviceListener


def all_cells(state: DeviceState, buffer: int) -> list:
    return [column[:] for column in state.buffers[buffer]]


class TestInitialState:
    """Test a freshly created device."""

    def test_starts_dark(self, state):
        """Test that every cell starts unlit."""
        assert all(cell is None for column in state.buffers[0] for cell in column)
        assert all(cell is None for column in state.buffers[1] for cell in column)

    def test_buffer_selection(self, state):
        """Test that buffer 0 is visible and written at start."""
        assert state.visible_buffer == 0
        assert state.write_buffer == 0
        assert state.back_buffer == 1

    def test_default_brightness_is_full(self, state):
        """Test that brightness starts at 1.0."""
        assert state.brightness == 1.0

    def test_initial_brightness_level(self):
        """Test the initial brightness level argument."""
        assert DeviceState(brightness_level=0).brightness == 0.1

    def test_grid_is_nine_by_nine(self, state):
        """Test the shape of each buffer."""
        assert len(state.buffers[0]) == 9
        assert all(len(column) == 9 for column in state.buffers[0])


class TestPadLight:
    """Test setting pad lights with back-buffer operations."""

    def test_none_writes_write_buffer_only(self, state):
        """Test that NONE leaves the back buffer alone."""
        state.set_buffers(BufferId.BUFFER_1, BufferId.BUFFER_0)
        visible_before = all_cells(state, 1)

        state.set_pad_light(3, 4, RED, BackBufferOperation.NONE)

        assert state.cell(0, 3, 4) == RED
        assert all_cells(state, 1) == visible_before

    def test_none_changes_only_one_cell(self, state):
        """Test that a pad light changes exactly one cell."""
        state.set_pad_light(3, 4, RED)

        lit = [
            (x, y)
            for x in range(9)
            for y in range(9)
            if state.buffers[0][x][y] is not None
        ]
        assert lit == [(3, 5)]

    def test_copy_mirrors_into_back_buffer(self, state):
        """Test that COPY writes the color to both buffers."""
        state.set_pad_light(2, 6, GREEN, BackBufferOperation.COPY)

        assert state.cell(state.write_buffer, 2, 6) == GREEN
        assert state.cell(state.back_buffer, 2, 6) == GREEN

    def test_clear_switches_back_buffer_off(self, state):
        """Test that CLEAR writes black to the back buffer."""
        state.set_buffers(BufferId.BUFFER_0, BufferId.BUFFER_1)
        state.set_pad_light(1, 1, RED, BackBufferOperation.COPY)

        state.set_pad_light(1, 1, AMBER, BackBufferOperation.CLEAR)

        assert state.cell(1, 1, 1) == AMBER
        assert state.cell(0, 1, 1) == BLACK
        assert state.display_color(1, 1).color == OFF_COLOR

    def test_out_of_range_pad_raises(self, state):
        """Test that pad coordinates outside 0-7 are rejected."""
        with pytest.raises(ProtocolError) as exc_info:
            state.set_pad_light(8, 0, RED)
        assert exc_info.value.field == "x"

        with pytest.raises(ProtocolError) as exc_info:
            state.set_pad_light(0, -1, RED)
        assert exc_info.value.field == "y"

    def test_non_color_is_rejected_before_writing(self, state):
        """Test that a value that is not a Color is rejected and nothing is stored."""
        before = all_cells(state, 0)

        with pytest.raises(ProtocolError) as exc_info:
            state.set_pad_light(0, 0, (2, 1))
        assert exc_info.value.field == "c"

        assert all_cells(state, 0) == before
        assert len(state.snapshot()) == 80

    def test_unknown_operation_is_rejected_before_writing(self, state):
        """Test that an unknown back buffer operation raises ProtocolError."""
        with pytest.raises(ProtocolError) as exc_info:
            state.set_pad_light(0, 0, RED, "BOGUS")
        assert exc_info.value.field == "o"

        assert state.cell(0, 0, 0) is None
        assert state.cell(1, 0, 0) is None

    def test_operation_may_be_a_string(self, state):
        """Test that the operation may be given by its wire name."""
        state.set_pad_light(4, 4, RED, "COPY")

        assert state.cell(1, 4, 4) == RED


class TestButtonLight:
    """Test round button addressing."""

    def test_top_button_lives_on_row_minus_one(self, state):
        """Test that top button i is stored at (i, -1)."""
        state.set_button_light(True, 2, RED)

        assert state.buffers[0][2][0] == RED
        assert state.display_color(2, -1).color == RED.to_hex()

    def test_side_button_lives_in_column_eight(self, state):
        """Test that side button i is stored at (8, i)."""
        state.set_button_light(False, 5, GREEN)

        assert state.buffers[0][8][6] == GREEN
        assert state.display_color(8, 5).color == GREEN.to_hex()

    def test_button_copy(self, state):
        """Test COPY on a button light."""
        state.set_button_light(False, 0, AMBER, BackBufferOperation.COPY)

        assert state.cell(0, 8, 0) == AMBER
        assert state.cell(1, 8, 0) == AMBER

    def test_non_color_is_rejected(self, state):
        """Test that a button light with a non-Color value raises ProtocolError."""
        with pytest.raises(ProtocolError) as exc_info:
            state.set_button_light(True, 1, "#F00")
        assert exc_info.value.field == "c"

        assert state.cell(0, 1, -1) is None

    def test_invalid_index_raises(self, state):
        """Test that a button index outside 0-7 is rejected."""
        with pytest.raises(ProtocolError) as exc_info:
            state.set_button_light(True, 8, RED)
        assert exc_info.value.field == "i"


class TestReset:
    """Test reset."""

    def test_reset_clears_both_buffers(self, state):
        """Test that reset switches off both buffers."""
        state.set_pad_light(0, 0, RED, BackBufferOperation.COPY)
        state.set_button_light(True, 7, GREEN)

        state.reset()

        for x, y in [(0, 0), (7, -1), (4, 4), (8, 7)]:
            cell = state.display_color(x, y)
            assert cell.color == OFF_COLOR
            assert cell.opacity == 1.0
        assert state.cell(1, 0, 0) is None

    def test_reset_keeps_selection_and_brightness(self, state):
        """Test that reset keeps buffer selection and brightness."""
        state.set_buffers(BufferId.BUFFER_1, BufferId.BUFFER_0)
        state.set_brightness(3)

        state.reset()

        assert state.visible_buffer == 1
        assert state.write_buffer == 0
        assert state.brightness == brightness_for_level(3)


class TestBrightness:
    """Test brightness to opacity mapping."""

    def test_minimum_level(self, state):
        """Test that level 0 gives 0.1."""
        state.set_brightness(0)
        state.set_pad_light(0, 0, RED)

        assert state.display_color(0, 0).opacity == 0.1
        assert state.display_color(1, 0).opacity == 1.0

    def test_maximum_level(self, state):
        """Test that level 15 gives 1.0."""
        state.set_brightness(15)
        state.set_pad_light(0, 0, RED)

        assert state.display_color(0, 0).opacity == 1.0

    def test_intermediate_level(self):
        """Test the brightness formula for a middle level."""
        assert brightness_for_level(5) == 0.4
        assert brightness_for_level(10) == 0.7

    def test_off_color_is_never_dimmed(self, state):
        """Test that unlit cells keep full opacity."""
        state.set_brightness(0)
        state.set_pad_light(0, 0, BLACK)

        assert state.display_color(0, 0).opacity == 1.0

    def test_out_of_range_raises(self, state):
        """Test that levels outside 0-15 are rejected."""
        with pytest.raises(ProtocolError) as exc_info:
            state.set_brightness(16)
        assert exc_info.value.field == "b"


class TestBuffers:
    """Test buffer selection and copying."""

    def test_back_buffer_follows_write_buffer(self, state):
        """Test that the back buffer is the one not being written."""
        state.set_buffers(BufferId.BUFFER_0, BufferId.BUFFER_1)
        assert state.back_buffer == 0

        state.set_buffers(BufferId.BUFFER_1, BufferId.BUFFER_0)
        assert state.back_buffer == 1

    def test_accepts_identifier_strings(self, state):
        """Test that buffer identifiers may be given as strings."""
        state.set_buffers("BUFFER_1", "BUFFER_1")
        assert state.visible_buffer == 1
        assert state.write_buffer == 1

    def test_copy_visible_to_write(self, state):
        """Test that the visible buffer is copied into the write buffer."""
        state.set_pad_light(0, 0, RED)
        state.set_button_light(True, 3, GREEN)
        prior_visible = all_cells(state, 0)

        state.set_buffers(BufferId.BUFFER_0, BufferId.BUFFER_1, copy_visible_to_write=True)

        assert all_cells(state, 1) == prior_visible

    def test_copy_does_not_alias(self, state):
        """Test that copied buffers change independently."""
        state.set_pad_light(0, 0, RED)
        state.set_buffers(BufferId.BUFFER_0, BufferId.BUFFER_1, copy_visible_to_write=True)

        state.set_pad_light(0, 0, GREEN)
        state.set_pad_light(5, 5, AMBER)

        assert state.cell(0, 0, 0) == RED
        assert state.cell(0, 5, 5) is None
        assert state.buffers[0] is not state.buffers[1]

    def test_display_follows_visible_buffer(self, state):
        """Test that the display shows the visible buffer."""
        state.set_buffers(BufferId.BUFFER_0, BufferId.BUFFER_1)
        state.set_pad_light(4, 4, RED)
        assert state.display_color(4, 4).color == OFF_COLOR

        state.set_buffers(BufferId.BUFFER_1, BufferId.BUFFER_1)
        assert state.display_color(4, 4).color == RED.to_hex()

    def test_auto_swap_is_accepted(self, state):
        """Test that auto swap is accepted and ignored."""
        state.set_buffers(BufferId.BUFFER_0, BufferId.BUFFER_1, auto_swap=True)
        assert state.visible_buffer == 0

    def test_unknown_identifier_raises(self, state):
        """Test that an unknown buffer identifier is rejected."""
        with pytest.raises(ProtocolError) as exc_info:
            state.set_buffers("BUFFER_2", BufferId.BUFFER_0)
        assert exc_info.value.field == "v"
        assert state.visible_buffer == 0


class TestTestLights:
    """Test the all-lights-on self test."""

    def test_fills_write_buffer_amber(self, state):
        """Test that test lights fill the write buffer with amber."""
        state.test_lights(5)

        assert all(cell == AMBER for column in state.buffers[0] for cell in column)
        assert state.brightness == 0.4

    def test_leaves_back_buffer_alone(self, state):
        """Test that test lights do not touch the back buffer."""
        state.test_lights(15)
        assert state.cell(1, 0, 0) is None


class TestUnsupportedOperations:
    """Test the stubbed bulk and text operations."""

    def test_set_lights_is_unsupported(self, state):
        """Test that set_lights reports it is not supported."""
        assert state.set_lights([RED, GREEN]) is False
        assert state.cell(0, 0, 0) is None

    def test_scroll_text_is_unsupported(self, state):
        """Test that scroll_text reports it is not supported."""
        assert state.scroll_text("hello", RED, ScrollSpeed.of(3), loop=True) is False
        assert all(cell is None for column in state.buffers[0] for cell in column)


class TestQueries:
    """Test raw and display queries."""

    def test_display_color_of_palette_entry(self, state):
        """Test display color and opacity of a lit pad."""
        state.set_pad_light(3, 4, Color.of(2, 1))

        cell = state.display_color(3, 4)
        assert cell.color == "#C60"
        assert cell.opacity == state.brightness

    def test_unused_corner_is_rejected(self, state):
        """Test that the unused corner cannot be queried."""
        with pytest.raises(ValueError):
            state.display_color(8, -1)

    def test_cell_rejects_bad_buffer(self, state):
        """Test that cell rejects a buffer index other than 0 or 1."""
        with pytest.raises(ValueError):
            state.cell(2, 0, 0)

    def test_snapshot_has_eighty_cells(self, state):
        """Test that a snapshot covers every display cell."""
        frame = state.snapshot()
        assert len(frame) == 80
        assert (8, -1) not in frame

    def test_render_text(self, state):
        """Test the text rendering of the visible buffer."""
        state.set_pad_light(0, 0, Color.of(3, 0))
        state.set_button_light(True, 1, Color.of(1, 2))

        lines = state.render_text().splitlines()

        assert len(lines) == 9
        assert lines[0].split() == [".", "12", ".", ".", ".", ".", ".", "."]
        assert lines[1].split()[0] == "30"
        assert len(lines[1].split()) == 9


class TestInput:
    """Test input forwarding to the listener."""

    def test_no_listener_is_a_no_op(self, state):
        """Test that input without a listener does nothing."""
        state.press_pad(0, 0)
        state.release_button(True, 1)

    def test_pad_events(self, state):
        """Test that pad presses and releases reach the listener."""
        listener = Mock(spec=DeviceListener)
        state.set_listener(listener)

        state.press_pad(1, 2)
        state.release_pad(1, 2)

        listener.on_pad_pressed.assert_called_once_with(1, 2)
        listener.on_pad_released.assert_called_once_with(1, 2)

    def test_button_event_coordinates(self, state):
        """Test that button events carry is_top and index."""
        listener = Mock(spec=DeviceListener)
        state.set_listener(listener)

        state.press_button(True, 2)
        state.press_button(False, 6)

        assert listener.on_button_pressed.call_args_list[0].args == (2, -1)
        assert listener.on_button_pressed.call_args_list[1].args == (-1, 6)

    def test_press_by_display_coordinates(self, state):
        """Test press and release by display coordinates."""
        listener = Mock(spec=DeviceListener)
        state.set_listener(listener)

        state.press(4, -1)
        state.press(8, 3)
        state.release(5, 5)

        assert listener.on_button_pressed.call_args_list[0].args == (4, -1)
        assert listener.on_button_pressed.call_args_list[1].args == (-1, 3)
        listener.on_pad_released.assert_called_once_with(5, 5)

    def test_replacing_and_clearing_listener(self, state):
        """Test that only the current listener receives input."""
        first, second = Mock(spec=DeviceListener), Mock(spec=DeviceListener)
        state.set_listener(first)
        state.set_listener(second)
        state.press_pad(0, 0)
        state.set_listener(None)
        state.press_pad(0, 0)

        first.on_pad_pressed.assert_not_called()
        second.on_pad_pressed.assert_called_once_with(0, 0)
        assert state.listener is None

    def test_input_does_not_touch_buffers(self, state):
        """Test that input leaves the buffers unchanged."""
        state.set_listener(Mock(spec=DeviceListener))
        before = (all_cells(state, 0), all_cells(state, 1))

        state.press_button(True, 2)

        assert (all_cells(state, 0), all_cells(state, 1)) == before
