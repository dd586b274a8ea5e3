"""Community folder routing and priority list loading.

A contact lands in exactly one folder. Single-community contacts use that
community; multi-community contacts use whichever of their communities
appears first in the priority list.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Iterable, Sequence, cast

import yaml

from core.constants import FALLBACK_FOLDER_NAME
from core.errors import TendConfigError

_LIST_ITEM_PATTERN = re.compile(r"^(?:\d+\.|[\d\w]+\.|-)\s+(.+)$")


def route_folder(communities: Sequence[str], priority_list: Sequence[str]) -> str:
    """Pick the owner folder for a contact.

    Args:
        communities: The contact's communities, in any order.
        priority_list: Community names in descending priority.

    Returns:
        Folder name, or the fallback folder when nothing routes.
    """
    if not communities:
        return FALLBACK_FOLDER_NAME
    if len(communities) == 1:
        return communities[0]
    members = set(communities)
    for community in priority_list:
        if community in members:
            return community
    return FALLBACK_FOLDER_NAME


def load_priority_list(priority_file: Path) -> tuple[str, ...]:
    """Load the ordered community priority list.

    ``.yaml``/``.yml`` files hold a list or a ``groups`` list; any other
    file is read as a Markdown list (``- Name`` or ``1. Name``).

    Args:
        priority_file: Path to the priority list.

    Returns:
        Community names in priority order.

    Raises:
        TendConfigError: If the file is missing, malformed, or empty.
    """
    if not priority_file.is_file():
        raise TendConfigError(
            f"Group priority config not found: {priority_file}. "
            "Set TEND_PRIORITY_FILE to a YAML or Markdown list of group names."
        )
    try:
        text = priority_file.read_text(encoding="utf-8")
    except OSError as error:
        raise TendConfigError(
            f"Failed to read group priority config at {priority_file}: {error}."
        ) from error
    if priority_file.suffix.lower() in (".yaml", ".yml"):
        groups = _parse_yaml_groups(text, priority_file)
    else:
        groups = _parse_markdown_groups(text)
    if not groups:
        raise TendConfigError(
            f"No groups found in priority config {priority_file}. Add at least one group name."
        )
    return groups


def _parse_yaml_groups(text: str, priority_file: Path) -> tuple[str, ...]:
    try:
        payload = cast(object, yaml.safe_load(text))
    except yaml.YAMLError as error:
        raise TendConfigError(
            f"Failed to parse YAML priority config at {priority_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    if isinstance(payload, dict):
        payload = payload.get("groups")
    if payload is None:
        return ()
    if not isinstance(payload, list):
        raise TendConfigError(
            f"Priority config at {priority_file} must be a list or a mapping with 'groups'."
        )
    return _unique(str(item).strip() for item in payload if str(item).strip())


def _parse_markdown_groups(text: str) -> tuple[str, ...]:
    names: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = _LIST_ITEM_PATTERN.match(stripped)
        if match:
            names.append(match.group(1).strip())
    return _unique(names)


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    ordered: list[str] = []
    for name in names:
        if name not in ordered:
            ordered.append(name)
    return tuple(ordered)
