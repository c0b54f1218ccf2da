"""Tests for the tk mine-grid window helpers that need no display."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

pytest.importorskip("tkinter")

from minegrid_gui import FACE_PRESSED, FACES, MineGridGUI, cell_style, face_for  # noqa: E402
from retrodesk.minegrid import LOST, PLAYING, WAITING, WON, MineGrid  # noqa: E402
from retrodesk.snapshot import FLAG, HIDDEN, MINE  # noqa: E402


class _FaceButton:
    def __init__(self) -> None:
        self.text = None

    def config(self, text: str) -> None:
        self.text = text


def _window(board: MineGrid) -> SimpleNamespace:
    return SimpleNamespace(board=board, btn_face=_FaceButton(), pressed=False)


class TestFace:
    def test_pressed_while_playing(self) -> None:
        assert face_for(PLAYING, pressed=True) == FACE_PRESSED

    @pytest.mark.parametrize("status", [WAITING, WON, LOST])
    def test_pressed_ignored_outside_play(self, status: str) -> None:
        assert face_for(status, pressed=True) == FACES[status]

    def test_lost_and_won_differ(self) -> None:
        assert face_for(LOST) != face_for(WON) != face_for(PLAYING)

    def test_press_then_leave_restores_face(self) -> None:
        board = MineGrid.from_layout(["*..", "..."])
        board.reveal(0, 1)
        window = _window(board)
        MineGridGUI.on_press(window, None)
        assert window.pressed
        assert window.btn_face.text == FACE_PRESSED
        MineGridGUI.on_leave(window, None)
        assert not window.pressed
        assert window.btn_face.text == FACES[PLAYING]

    def test_press_on_finished_board_keeps_face(self) -> None:
        board = MineGrid.from_layout(["*..", "..."])
        board.reveal(0, 0)
        window = _window(board)
        MineGridGUI.on_press(window, None)
        assert window.btn_face.text == FACES[LOST]


class TestCellStyle:
    def test_hidden_and_flag(self) -> None:
        hidden_fill, hidden_glyph, _ = cell_style(HIDDEN)
        flag_fill, flag_glyph, _ = cell_style(FLAG)
        assert hidden_glyph == ""
        assert flag_glyph == "🚩"
        assert hidden_fill == flag_fill

    def test_mine(self) -> None:
        fill, glyph, color = cell_style(MINE)
        assert glyph == "💣"
        assert color is None
        assert fill != cell_style(HIDDEN)[0]

    def test_zero_is_blank(self) -> None:
        assert cell_style(0)[1] == ""

    @pytest.mark.parametrize("n", range(1, 9))
    def test_numbers_have_colour(self, n: int) -> None:
        _, glyph, color = cell_style(n)
        assert glyph == str(n)
        assert color
