"""Utility helpers for arenaset."""
