"""Document vault layout and persistence.

This package routes canonical contacts into community folders, renders
their Markdown documents, and writes them without overwriting.
"""
