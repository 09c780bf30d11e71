"""
Tests for the command line entry point.
"""
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from main import main, load_teams


class TestShow:
    """Tests for `main.py show`."""

    def test_show_template(self, capsys):
        assert main(['show', '5']) == 0
        out = capsys.readouterr().out
        assert "5 teams: 9 matches" in out
        assert "Grand Final" in out

    def test_show_generic(self, capsys):
        assert main(['show', '6', '--generic']) == 0
        assert "(generic)" in capsys.readouterr().out

    def test_show_unsupported(self, capsys):
        assert main(['show', '1']) == 1
        assert "Unsupported number of teams" in capsys.readouterr().err


class TestGenerate:
    """Tests for `main.py generate`."""

    def test_generate_from_names(self, tmp_path, capsys):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text(yaml.dump(['Aces', 'Blockers', 'Diggers']))
        assert main(['generate', str(teams_file)]) == 0
        out = capsys.readouterr().out
        assert "1. Aces" in out
        assert "Aces advances" in out

    def test_load_teams_with_ids(self, tmp_path):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text(yaml.dump({'teams': [{'id': 'a', 'name': 'Aces'}, {'name': 'Blockers'}]}))
        teams = load_teams(str(teams_file))
        assert [(t.id, t.name) for t in teams] == [('a', 'Aces'), ('Blockers', 'Blockers')]

    def test_generate_missing_file(self, tmp_path, capsys):
        assert main(['generate', str(tmp_path / "missing.yaml")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_generate_not_a_list(self, tmp_path, capsys):
        teams_file = tmp_path / "teams.yaml"
        teams_file.write_text("name: Aces\n")
        assert main(['generate', str(teams_file)]) == 1
