"""
CLI Tests

Runs cli.main() with patched argv and checks exit codes and output.
"""

import json
import sys

import pytest

import cli


def run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["cli.py", *argv])
    return cli.main()


class TestCli:
    """Test the subcommands that do not start a server."""

    def test_no_command(self, monkeypatch, capsys):
        assert run(monkeypatch) == 1

    def test_monsters_by_category(self, monkeypatch, capsys):
        assert run(monkeypatch, "monsters", "--category", "jack") == 0
        out = capsys.readouterr().out
        assert "Treant" in out
        assert "Dragon" not in out

    def test_vyridion_lists_twenty_rows(self, monkeypatch, capsys):
        run(monkeypatch, "monsters", "--category", "final")
        out = capsys.readouterr().out
        assert "20: Astril Unmaking" in out

    def test_classes(self, monkeypatch, capsys):
        assert run(monkeypatch, "classes") == 0
        out = capsys.readouterr().out
        assert "Bladedancer" in out
        assert "Hunter's Mark" in out

    def test_fight_json(self, monkeypatch, capsys):
        assert run(monkeypatch, "fight", "--seed", "42", "--json") == 0
        data = json.loads(capsys.readouterr().out)
        assert isinstance(data["victory"], bool)
        assert data["events"]

    def test_fight_text(self, monkeypatch, capsys):
        assert run(monkeypatch, "fight", "--seed", "ABC", "--order", "left") == 0
        assert "Result:" in capsys.readouterr().out

    def test_fight_unknown_monster(self, monkeypatch, capsys):
        assert run(monkeypatch, "fight", "--monster", "slime_king") == 1

    def test_bad_room_choice(self, monkeypatch):
        with pytest.raises(SystemExit):
            run(monkeypatch, "fight", "--room", "heart")
