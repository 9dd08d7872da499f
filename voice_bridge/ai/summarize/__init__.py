"""Transcript summarization endpoint."""
