"""Upload event ingestion.

This package routes storage events by folder, loads uploaded content,
and runs the middleware pipelines that produce document writes.
"""
