"""Test the CLI interface helpers"""
import pytest

from slsgraph.cli import interface as ui

ARGS = {"--vverbose": False, "--verbose": False, "--quiet": False}


@pytest.mark.parametrize("no_colours", [True, False])
def test_colour_helpers_after_init(no_colours):
    ui.init({**ARGS, "--no-colours": no_colours})
    for helper in [ui.good, ui.bad, ui.dim, ui.neutral]:
        assert "done" in str(helper("done"))


def test_plain_text_without_colours():
    ui.init({**ARGS, "--no-colours": True})
    assert str(ui.good("done")) == "done"
