import pytest
from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtGui import QKeyEvent

from docdesk.state.keyboard import KeyboardDispatcher
from docdesk.state.palette import CommandPalette

pytestmark = pytest.mark.usefixtures("qapp")

NO_MODIFIER = Qt.KeyboardModifier.NoModifier
CTRL = Qt.KeyboardModifier.ControlModifier
META = Qt.KeyboardModifier.MetaModifier


@pytest.fixture
def palette():
    return CommandPalette(lambda: [])


@pytest.fixture
def dispatcher(palette):
    return KeyboardDispatcher(palette)


def test_ctrl_k_toggles_palette(dispatcher, palette):
    assert dispatcher.handle_key(Qt.Key.Key_K, CTRL)
    assert palette.is_open
    assert dispatcher.handle_key(Qt.Key.Key_K, CTRL)
    assert not palette.is_open


def test_meta_k_toggles_palette(dispatcher, palette):
    assert dispatcher.handle_key(Qt.Key.Key_K, META)
    assert palette.is_open


def test_plain_k_is_not_consumed(dispatcher, palette):
    assert not dispatcher.handle_key(Qt.Key.Key_K, NO_MODIFIER)
    assert not palette.is_open


def test_escape_closes_open_palette(dispatcher, palette):
    palette.open()
    assert dispatcher.handle_key(Qt.Key.Key_Escape, NO_MODIFIER)
    assert not palette.is_open


def test_escape_is_inert_when_closed(dispatcher, palette):
    assert not dispatcher.handle_key(Qt.Key.Key_Escape, NO_MODIFIER)
    assert not palette.is_open


def test_event_filter_consumes_shortcut(dispatcher, palette):
    event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_K.value, CTRL)
    assert dispatcher.eventFilter(QObject(), event)
    assert palette.is_open


def test_event_filter_ignores_autorepeat(dispatcher, palette):
    event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_K.value, CTRL, "k", True)
    assert not dispatcher.eventFilter(QObject(), event)
    assert not palette.is_open


def test_install_and_uninstall_are_idempotent(dispatcher):
    target = QObject()
    dispatcher.install(target)
    dispatcher.install(target)
    assert dispatcher.is_installed

    dispatcher.uninstall()
    dispatcher.uninstall()
    assert not dispatcher.is_installed
