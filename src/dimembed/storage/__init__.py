"""Persistent graph accessors."""
