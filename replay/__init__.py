"""Replay historical swaps and compare baseline quotes against forced mixed routes."""
