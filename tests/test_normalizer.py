"""Tests de la normalisation du corpus et de la lecture des fichiers."""

from __future__ import annotations

import json
from datetime import timedelta

import pytest

from lycans.data.domain.models.game import VoteKind
from lycans.data.identity import PlayerIdentityResolver
from lycans.data.loader import CorpusError, load_game_log, load_identity_resolver, write_json
from lycans.data.normalizer import entries_frame, filter_modded, normalize_corpus, parse_game_id


class TestParseGameId:
    """Clé chronologique extraite de l'Id."""

    def test_timestamp_and_number(self):
        assert parse_game_id("Ponce-20231013000000-12") == ("20231013000000", 12)

    def test_timestamp_only(self):
        assert parse_game_id("Ponce-20231013000000") == ("20231013000000", 0)

    def test_unknown_format(self):
        assert parse_game_id("legacy") == ("0", 0)


class TestNormalizeCorpus:
    """Validation, tri chronologique et identité canonique."""

    def test_games_sorted_and_numbered(self, make_game, make_player):
        raw = [make_game(3, [make_player("A")]), make_game(1, [make_player("A")]), make_game(2, [make_player("A")])]
        games = normalize_corpus(raw).games
        assert [g.displayed_id for g in games] == [1, 2, 3]
        assert [g.game_id.rsplit("-", 1)[1] for g in games] == ["1", "2", "3"]

    def test_malformed_game_dropped(self, make_game, make_player, caplog):
        """Une partie sans champ requis est ignorée avec un warning."""
        bad = make_game(2, [make_player("A")])
        del bad["PlayerStats"][0]["Victorious"]
        result = normalize_corpus([make_game(1, [make_player("A")]), bad])
        assert len(result.games) == 1
        assert result.dropped == 1
        assert "invalide" in caplog.text

    def test_not_a_list_raises(self):
        with pytest.raises(TypeError):
            normalize_corpus({"GameStats": []})

    def test_identity_resolved_once(self, make_game, make_player):
        """Deux orthographes du même joueur donnent un seul identifiant."""
        resolver = PlayerIdentityResolver.from_joueurs_data(
            {"Players": [{"Joueur": "Alice", "SteamID": "42"}]}
        )
        raw = [
            make_game(1, [make_player("alice")]),
            make_game(2, [make_player("ALICE ")]),
            make_game(3, [make_player("Whatever", steam_id="42")]),
        ]
        result = normalize_corpus(raw, resolver)
        assert {e.player_id for g in result.games for e in g.entries} == {"42"}
        assert result.player_names == {"42": "Alice"}

    def test_votes_and_killer_resolved(self, make_game, make_player, make_vote):
        raw = [
            make_game(
                1,
                [
                    make_player("Alice", votes=[make_vote(1, "bob"), make_vote(2, "Passé")]),
                    make_player("Bob", "Loup", death_type="BY_WOLF", death_timing="N2", killer="ALICE"),
                    make_player("Carol", votes=[make_vote(1, None)]),
                ],
            )
        ]
        game = normalize_corpus(raw).games[0]
        alice, bob, carol = game.entries
        assert alice.votes[0].kind == VoteKind.VOTE
        assert alice.votes[0].target_id == "Bob"
        assert alice.votes[1].kind == VoteKind.SKIP
        assert carol.votes[0].kind == VoteKind.ABSTAIN
        assert bob.death is not None
        assert bob.death.killer_id == "Alice"
        assert game.max_meeting == 2

    def test_final_role_from_changes(self, make_game, make_player):
        raw = [make_game(1, [make_player("A", "Villageois", final_role="Loup")])]
        entry = normalize_corpus(raw).games[0].entries[0]
        assert entry.initial_role == "Villageois"
        assert entry.final_role == "Loup"
        assert entry.camp == "Loup"

    def test_legacy_death_flag(self, make_game, make_player):
        games = normalize_corpus([make_game(1, [make_player("A")], death_info=False)]).games
        assert games[0].death_information_filled is False

    def test_filter_modded(self, make_game, make_player):
        games = normalize_corpus(
            [make_game(1, [make_player("A")], modded=True), make_game(2, [make_player("A")])]
        ).games
        modded = filter_modded(games)
        assert len(modded) == 1
        assert modded[0].displayed_id == 1

    @pytest.mark.parametrize(
        "raw, expected",
        [("false", False), ("False", False), ("0", False), ("", False), ("true", True), (1, True), (None, False)],
    )
    def test_modded_flag_parsing(self, make_game, make_player, raw, expected):
        """Un Modded sous forme de chaîne "false" reste une partie non moddée."""
        game = make_game(1, [make_player("A")])
        game["Modded"] = raw
        assert normalize_corpus([game]).games[0].modded is expected

    def test_malformed_vote_keeps_game(self, make_game, make_player, make_vote):
        """Un vote sans Day exploitable ne fait pas tomber la partie."""
        voter = make_player(
            "A",
            votes=[
                {"Day": None, "Target": "B"},
                {"Target": "B"},
                {"Day": "deux", "Target": "B"},
                make_vote(1, "B"),
            ],
        )
        result = normalize_corpus([make_game(1, [voter, make_player("B")]), make_game(2, [make_player("A")])])
        assert len(result.games) == 2
        assert result.dropped == 0
        entry = result.games[0].entries[0]
        assert [v.meeting for v in entry.votes] == [0, 0, 0, 1]
        assert result.games[0].max_meeting == 1

    def test_dates_are_utc_aware(self, make_game, make_player):
        """Dates avec et sans fuseau deviennent comparables (UTC)."""
        game = make_game(1, [make_player("A")])
        game["StartDate"] = "2024-01-01T12:00:00"
        game["EndDate"] = "2024-01-01T14:30:00+02:00"
        record = normalize_corpus([game]).games[0]
        assert record.start_date.utcoffset() == timedelta(0)
        assert record.end_date.utcoffset() == timedelta(0)
        assert record.duration_for(record.entries[0]) == pytest.approx(1800.0)


class TestAliveAtMeeting:
    """Présence aux meetings selon le moment de la mort."""

    @pytest.mark.parametrize(
        ("timing", "meeting", "expected"),
        [("M2", 2, True), ("M2", 3, False), ("N2", 2, False), ("N2", 1, True), ("J3", 2, True), ("J3", 3, False)],
    )
    def test_timings(self, make_game, make_player, timing, meeting, expected):
        raw = [make_game(1, [make_player("A", death_type="VOTED", death_timing=timing)])]
        entry = normalize_corpus(raw).games[0].entries[0]
        assert entry.was_alive_at_meeting(meeting) is expected


class TestEntriesFrame:
    """Vue Polars à plat."""

    def test_empty_corpus_has_schema(self):
        df = entries_frame(())
        assert df.is_empty()
        assert "player_id" in df.columns

    def test_one_row_per_participation(self, make_game, make_player, normalize):
        games = normalize([make_game(1, [make_player("A", "Chasseur", True), make_player("B", "Traître")])])
        df = entries_frame(games)
        assert df.height == 2
        rows = {r["player_id"]: r for r in df.iter_rows(named=True)}
        assert rows["A"]["detailed_camp"] == "Chasseur"
        assert rows["A"]["camp"] == "Villageois"
        assert rows["B"]["faction"] == "Loup"


class TestLoader:
    """Lecture et écriture des fichiers JSON."""

    def test_load_game_log(self, tmp_path, make_game, make_player):
        path = tmp_path / "gameLog.json"
        path.write_text(
            json.dumps({"TotalRecords": 1, "GameStats": [make_game(1, [make_player("A")])]}),
            encoding="utf-8",
        )
        assert len(load_game_log(path)) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(CorpusError):
            load_game_log(tmp_path / "absent.json")

    def test_invalid_structure(self, tmp_path):
        path = tmp_path / "gameLog.json"
        path.write_text(json.dumps({"GameStats": "oops"}), encoding="utf-8")
        with pytest.raises(CorpusError):
            load_game_log(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "gameLog.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(CorpusError):
            load_game_log(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "gameLog.json"
        path.write_bytes(b'{"GameStats": [{"Id": "\xff\xfe"}]}')
        with pytest.raises(CorpusError, match="Encodage"):
            load_game_log(path)

    def test_directory_path(self, tmp_path):
        with pytest.raises(CorpusError):
            load_game_log(tmp_path)

    def test_joueurs_directory_path(self, tmp_path):
        (tmp_path / "joueurs.json").mkdir()
        with pytest.raises(CorpusError):
            load_identity_resolver(tmp_path / "joueurs.json")

    def test_missing_joueurs_is_not_an_error(self, tmp_path):
        resolver = load_identity_resolver(tmp_path / "joueurs.json")
        assert resolver.known_players == 0

    def test_write_json_creates_parent(self, tmp_path):
        out = write_json({"é": 1}, tmp_path / "sub" / "out.json")
        assert json.loads(out.read_text(encoding="utf-8")) == {"é": 1}
