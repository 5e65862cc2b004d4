"""Tests for the termdeck command line."""

from typer.testing import CliRunner

from termdeck import __version__
from termdeck.main import app

runner = CliRunner()

LAYOUT = """
keys:
  next: tab
root:
  split:
    direction: horizontal
    fixed: 3
    first:
      id: header
      widget: title
      focus: {skip: true}
    second:
      split:
        first: {id: left, widget: logs}
        second: {id: right, widget: cpu, focus: {focused: true}}
"""


def _write(layouts_dir, name, text):
    (layouts_dir / f"{name}.yaml").write_text(text)
    return name


class TestCLIBasics:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "validate" in result.output
        assert "resolve" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestValidateCommand:
    def test_valid_layout(self, isolated_config):
        name = _write(isolated_config, "dash", LAYOUT)
        result = runner.invoke(app, ["validate", name])
        assert result.exit_code == 0
        assert "is valid" in result.output
        assert "header" in result.output
        assert "(focused)" in result.output

    def test_invalid_layout_lists_problems(self, isolated_config):
        name = _write(
            isolated_config,
            "dup",
            "split:\n  percent: 30\n  fixed: 3\n  first: {id: a}\n  second: {id: a}\n",
        )
        result = runner.invoke(app, ["validate", name])
        assert result.exit_code == 1
        assert "is invalid" in result.output
        assert "duplicate container ID 'a'" in result.output
        assert "split_fixed" in result.output

    def test_option_error(self, isolated_config):
        name = _write(isolated_config, "bad", "margin: {top: -1}\n")
        result = runner.invoke(app, ["validate", name])
        assert result.exit_code == 1
        assert "margin_top" in result.output

    def test_malformed_values_exit_cleanly(self, isolated_config):
        name = _write(isolated_config, "sizes", "split:\n  percent: 30%\n")
        result = runner.invoke(app, ["validate", name])
        assert result.exit_code == 1
        assert "must be an integer" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_missing_layout(self):
        result = runner.invoke(app, ["validate", "nowhere"])
        assert result.exit_code == 1
        assert "Layout not found" in result.output


class TestResolveCommand:
    def test_resolve(self, isolated_config):
        name = _write(isolated_config, "dash", LAYOUT)
        result = runner.invoke(app, ["resolve", name, "--width", "40", "--height", "10"])
        assert result.exit_code == 0
        assert "0,0 40x3" in result.output
        assert "0,3 20x7" in result.output
        assert "20,3 20x7" in result.output

    def test_resolve_errors_exit_nonzero(self, isolated_config):
        name = _write(isolated_config, "tight", "id: solo\nwidget: w\nmargin: {top: 5}\n")
        result = runner.invoke(app, ["resolve", name, "-w", "10", "-h", "4"])
        assert result.exit_code == 1
        assert "zero height" in result.output


class TestFocusOrderCommand:
    def test_focus_order(self, isolated_config):
        name = _write(isolated_config, "dash", LAYOUT)
        result = runner.invoke(app, ["focus-order", name])
        assert result.exit_code == 0
        assert "Initially focused: right" in result.output
        assert "left → right" in result.output
        assert "header" not in result.output.splitlines()[-1]

    def test_nothing_focusable(self, isolated_config):
        name = _write(isolated_config, "skip", "widget: w\nfocus: {skip: true}\n")
        result = runner.invoke(app, ["focus-order", name])
        assert result.exit_code == 0
        assert "No containers" in result.output


class TestLayoutsCommand:
    def test_lists_layouts(self, isolated_config):
        _write(isolated_config, "dash", LAYOUT)
        result = runner.invoke(app, ["layouts"])
        assert result.exit_code == 0
        assert "dash" in result.output

    def test_no_layouts(self):
        result = runner.invoke(app, ["layouts"])
        assert result.exit_code == 0
        assert "No layouts found" in result.output
