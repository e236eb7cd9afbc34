"""Preset Builder application."""
