"""Moteur de classement et de succès pour les parties de Lycans."""

__version__ = "1.0.0"
