"""
Tests for the command-line interface.
"""

from ..cli import main


class TestCLI:

    def test_validate_presets(self, capsys):
        assert main(["validate-presets"]) == 0
        out = capsys.readouterr().out
        assert "ok: Starter Deck (starter-deck)" in out
        assert "2 valid, 0 invalid" in out

    def test_show_creates_session(self, tmp_path, capsys):
        state_file = tmp_path / "state.json"
        assert main(["--state-file", str(state_file), "show"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("Turn 1 (discarding)")
        assert state_file.exists()

    def test_reset(self, tmp_path, capsys):
        state_file = tmp_path / "state.json"
        assert main(["--state-file", str(state_file), "reset"]) == 0
        assert "Hand size 5, discard count 5" in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 1
