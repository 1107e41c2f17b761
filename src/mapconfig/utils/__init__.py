"""Utility helpers for mapconfig."""
