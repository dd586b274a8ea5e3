"""Contact batch ingestion.

This package reads batch contact lists, tracks resume checkpoints,
and drives rate-limited lookups into the vault writer.
"""
