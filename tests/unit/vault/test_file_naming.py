"""Unit tests for vault filename sanitization."""

from __future__ import annotations

from vault.file_naming import build_filename, sanitize_filename, versioned_filename


def test_sanitize_removes_illegal_characters() -> None:
    """Reserved filesystem characters should be removed."""
    assert sanitize_filename('Ada <"Countess"> Lovelace?') == "Ada Countess Lovelace"


def test_sanitize_collapses_whitespace_and_trims_dots() -> None:
    """Whitespace runs should collapse and edge dots should go."""
    assert sanitize_filename("  ..Grace \t  Hopper.. ") == "Grace Hopper"


def test_sanitize_caps_length() -> None:
    """Long names should be truncated to 200 characters."""
    assert len(sanitize_filename("x" * 250)) == 200


def test_sanitize_can_return_empty() -> None:
    """Names made of illegal characters should sanitize to nothing."""
    assert sanitize_filename("???") == ""


def test_build_filename_appends_extension() -> None:
    """Document filenames should end in .md."""
    assert build_filename("Ada/Lovelace") == "AdaLovelace.md"


def test_versioned_filename_suffixes_from_two() -> None:
    """First version is unsuffixed and later versions carry -N."""
    assert [versioned_filename("Ada", version) for version in (1, 2, 5)] == [
        "Ada.md",
        "Ada-2.md",
        "Ada-5.md",
    ]
