"""Tests for the Streamlit app module."""

from CineMedia import app


def test_settings_popover_has_label():
    assert app.SETTINGS_LABEL.strip()
