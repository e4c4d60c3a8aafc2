import pytest

from docdesk.themes.theme_manager import ThemeManager
from docdesk.themes.themes import DarkTheme, LightTheme, ResolvedTheme, ThemeMode

pytestmark = pytest.mark.usefixtures("qapp")


def test_theme_mode_parse_and_cycle():
    assert ThemeMode.parse("dark") == ThemeMode.DARK
    assert ThemeMode.parse("sepia") is None
    assert ThemeMode.SYSTEM.next() == ThemeMode.DARK
    assert ThemeMode.LIGHT.next() == ThemeMode.SYSTEM


def test_apply_switches_palette():
    manager = ThemeManager(ResolvedTheme.DARK)
    assert manager.current_theme is DarkTheme

    manager.apply(ResolvedTheme.LIGHT)

    assert manager.current_theme is LightTheme
    assert not manager.is_dark_mode()


def test_stylesheet_uses_current_palette():
    manager = ThemeManager(ResolvedTheme.LIGHT)
    stylesheet = manager.build_stylesheet()
    assert LightTheme.BG_PRIMARY in stylesheet
    assert "paletteBackdrop" in stylesheet
    assert 'readerStatus[state="error"]' in stylesheet


def test_theme_changed_is_debounced(qapp):
    manager = ThemeManager(ResolvedTheme.DARK)
    emitted = []
    manager.theme_changed.connect(emitted.append)

    manager.apply(ResolvedTheme.LIGHT)
    manager.apply(ResolvedTheme.DARK)
    manager.apply(ResolvedTheme.LIGHT)
    manager._debounce_timer.stop()
    manager._do_emit_theme_changed()

    assert emitted == ["light"]
