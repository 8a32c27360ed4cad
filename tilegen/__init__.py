"""Tilegen - bit-packed texture atlas and tile grid editing core."""
