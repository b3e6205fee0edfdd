"""Tests du script scripts/generate_achievements.py."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "generate_achievements.py"


@pytest.fixture
def script():
    module_spec = importlib.util.spec_from_file_location("generate_achievements", SCRIPT_PATH)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


@pytest.fixture
def data_dir(tmp_path, make_game, make_player):
    games = [make_game(i, [make_player("Alice", victorious=True), make_player("Bob", "Loup")]) for i in range(1, 4)]
    (tmp_path / "gameLog.json").write_text(
        json.dumps({"TotalRecords": len(games), "GameStats": games}), encoding="utf-8"
    )
    return tmp_path


class TestGenerateAchievementsScript:
    def test_writes_output(self, script, data_dir):
        assert script.main(["--data-dir", str(data_dir)]) == 0
        data = json.loads((data_dir / "playerAchievements.json").read_text(encoding="utf-8"))
        assert data["totalGames"] == 3
        assert set(data["achievements"]) == {"Alice", "Bob"}

    def test_dry_run_writes_nothing(self, script, data_dir):
        assert script.main(["--data-dir", str(data_dir), "--dry-run", "--player", "Alice"]) == 0
        assert not (data_dir / "playerAchievements.json").exists()

    def test_explicit_output(self, script, data_dir, tmp_path):
        out = tmp_path / "out" / "achievements.json"
        assert script.main(["--game-log", str(data_dir / "gameLog.json"), "--output", str(out)]) == 0
        assert out.exists()

    def test_missing_game_log_exits_1(self, script, tmp_path):
        assert script.main(["--data-dir", str(tmp_path)]) == 1

    def test_discord_source(self, script, data_dir):
        """La source discord lit le sous-dossier discord/."""
        assert script.main(["--data-dir", str(data_dir), "--source", "discord"]) == 1

    def test_invalid_encoding_exits_1(self, script, tmp_path):
        (tmp_path / "gameLog.json").write_bytes(b'{"GameStats": [{"Id": "\xff\xfe"}]}')
        assert script.main(["--data-dir", str(tmp_path)]) == 1
