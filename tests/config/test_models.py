"""Tests for the configuration section models."""

import pytest
from pydantic import ValidationError

from dthread.config.models import DThreadConfig, LayoutConfig


class TestModels:
    def test_frozen(self) -> None:
        config = DThreadConfig()
        with pytest.raises(ValidationError):
            config.layout.padding = 1  # type: ignore[misc]

    def test_display_mode_validated(self) -> None:
        with pytest.raises(ValidationError):
            LayoutConfig(display_mode="sparkly")  # type: ignore[arg-type]

    def test_display_mode_from_string(self) -> None:
        assert LayoutConfig(display_mode="full").display_mode.value == "full"  # type: ignore[arg-type]
