"""Bundled seed dataset."""
