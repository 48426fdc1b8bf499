"""Zona Flash backend: nearby map search and hunt rewards."""
