"""Test package initialisation for stockassess tests."""
