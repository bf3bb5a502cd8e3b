"""Tests for the Rich console factory."""

from dthread.output.console import (
    DTHREAD_THEME,
    create_console,
    get_output,
    style_for_relationship,
)


class TestConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console(no_color=True)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_theme_styles(self) -> None:
        assert "dt.ok" in DTHREAD_THEME.styles
        assert "dt.domain" in DTHREAD_THEME.styles

    def test_width_override(self) -> None:
        assert create_console(width=60).width == 60

    def test_relationship_styles(self) -> None:
        assert style_for_relationship("DRIVES") == "dt.rel.drives"
        assert style_for_relationship("RELATED_TO") == "dt.rel"
        assert style_for_relationship("bogus") == "dt.rel"
