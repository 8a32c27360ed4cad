"""Serialization formats: map files, hex rows, compact JSON."""
