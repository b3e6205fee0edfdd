"""Couche domaine : données de référence et modèles."""
