"""Storage collaborators.

This package wraps the object store, the document database, and the
service context that carries both through the pipelines.
"""
