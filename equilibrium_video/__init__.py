"""Wellbeing-aware YouTube video recommendations from a free-form user prompt."""
