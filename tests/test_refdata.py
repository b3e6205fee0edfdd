"""Tests des tables de référence (rôles, camps, relations)."""

from __future__ import annotations

import pytest

from lycans.data.domain.refdata import (
    AMOUREUX,
    LOUP,
    VILLAGEOIS,
    MainCamp,
    are_opposing_camps,
    get_camp_from_role,
    get_camp_relation,
    get_main_camp_from_role,
    is_solo_camp,
)


class TestCampFromRole:
    """Conversion rôle → camp."""

    @pytest.mark.parametrize(
        ("role", "expected"),
        [
            ("Villageois", VILLAGEOIS),
            ("Chasseur", VILLAGEOIS),
            ("Alchimiste", VILLAGEOIS),
            ("Amoureux Loup", AMOUREUX),
            ("Zombie", "Vaudou"),
            ("Traître", "Traître"),
            ("", VILLAGEOIS),
            (None, VILLAGEOIS),
        ],
    )
    def test_default_grouping(self, role, expected):
        """Regroupement par défaut (amoureux et sous-rôles villageois)."""
        assert get_camp_from_role(role) == expected

    def test_detailed_keeps_villager_sub_roles(self):
        """Sans regroupement, Chasseur garde son camp."""
        assert get_camp_from_role("Chasseur", regroup_villagers=False) == "Chasseur"

    def test_wolf_sub_roles_regrouped_on_demand(self):
        """Traître et Louveteau rejoignent Loup sur demande."""
        assert get_camp_from_role("Louveteau", regroup_wolf_sub_roles=True) == LOUP

    def test_lovers_kept_on_demand(self):
        assert get_camp_from_role("Amoureux Villageois", regroup_lovers=False) == "Amoureux Villageois"


class TestMainCamp:
    """Grand camp utilisé par les séries."""

    def test_main_camps(self):
        assert get_main_camp_from_role("Loup") == MainCamp.LOUP
        assert get_main_camp_from_role("Traître") == MainCamp.LOUP
        assert get_main_camp_from_role("Chasseur") == MainCamp.VILLAGEOIS
        assert get_main_camp_from_role("Idiot du Village") == MainCamp.AUTRES


class TestCampRelations:
    """Table statique des camps opposés."""

    def test_main_factions_oppose(self):
        assert are_opposing_camps(VILLAGEOIS, LOUP)
        assert are_opposing_camps(LOUP, VILLAGEOIS)

    def test_same_camp_does_not_oppose(self):
        assert not are_opposing_camps(LOUP, LOUP)

    def test_two_solo_roles_do_not_oppose(self):
        """Deux rôles solo différents ne s'affrontent pas."""
        assert not are_opposing_camps("Agent", "Cannibale")

    def test_solo_opposes_main_factions(self):
        assert are_opposing_camps(AMOUREUX, VILLAGEOIS)
        assert are_opposing_camps(LOUP, "Idiot du Village")

    def test_unknown_camp_is_solo(self):
        """Un camp absent de la table est traité comme un rôle solo."""
        assert is_solo_camp("Nouveau Rôle")
        assert get_camp_relation("Nouveau Rôle").opposing == frozenset({VILLAGEOIS, LOUP})

    def test_main_factions_are_not_solo(self):
        assert not is_solo_camp(VILLAGEOIS)
        assert not is_solo_camp(LOUP)
