"""Clay contact lookup clients.

This package resolves contact ids and names to typed Clay records.
Each client hides its own transport and response shape.
"""
