"""Presentation layer: public entry points and the pytest plugin."""
