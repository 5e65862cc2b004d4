"""Shared pytest fixtures for termdeck tests."""

import logging

import pytest

from termdeck.container import Container
from termdeck.container.options import (
    id_,
    left,
    place_widget,
    right,
    split_vertical,
)


class FakeWidget:
    """Stand-in for a widget; the container core never looks inside it."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"FakeWidget({self.name!r})"


@pytest.fixture
def widget():
    return FakeWidget("w")


@pytest.fixture
def abc_tree():
    """Tree with leaves A | (B | C)."""
    return Container.new(
        split_vertical(
            left(id_("A"), place_widget(FakeWidget("a"))),
            right(
                id_("BC"),
                split_vertical(
                    left(id_("B"), place_widget(FakeWidget("b"))),
                    right(id_("C"), place_widget(FakeWidget("c"))),
                ),
            ),
        ),
    )


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.config/termdeck."""
    layouts = tmp_path / "layouts"
    layouts.mkdir()
    monkeypatch.setenv("TERMDECK_LAYOUTS_DIR", str(layouts))
    monkeypatch.delenv("TERMDECK_LOG_LEVEL", raising=False)
    yield layouts

    # The CLI attaches a stderr handler that outlives the test runner.
    logger = logging.getLogger("termdeck")
    for handler in [h for h in logger.handlers if getattr(h, "_termdeck_cli", False)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
