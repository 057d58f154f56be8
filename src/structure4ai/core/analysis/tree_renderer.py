from __future__ import annotations

"""
Tree Renderer.

Builds the visual line shown for each walk entry. A line is the inherited
prefix, a connector (├── or └──), an icon and the entry name. The prefix
grows by four spaces under a last child and by a vertical bar otherwise, so
the rendering mirrors the tree shape rather than the bare depth.
"""

from typing import List

from structure4ai.core.analysis.icons import (
    ACCESS_DENIED_ICON,
    ERROR_ICON,
    ROOT_ICON,
)

CONNECTOR_MID = "├── "
CONNECTOR_LAST = "└── "
PREFIX_MID = "│   "
PREFIX_LAST = "    "

ACCESS_DENIED_LABEL = "[Access Denied]"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def connector(is_last: bool) -> str:
    return CONNECTOR_LAST if is_last else CONNECTOR_MID


def child_prefix(prefix: str, is_last: bool) -> str:
    """Extend a prefix for the children of an entry."""
    return prefix + (PREFIX_LAST if is_last else PREFIX_MID)


def render_entry_line(prefix: str, is_last: bool, icon: str, name: str) -> str:
    return f"{prefix}{connector(is_last)}{icon} {name}"


def error_label(message: str) -> str:
    return f"[Error: {message}]"


def render_access_denied_line(prefix: str) -> str:
    """Render the single marker that replaces an unreadable directory's children."""
    return f"{prefix}{CONNECTOR_LAST}{ACCESS_DENIED_ICON} {ACCESS_DENIED_LABEL}"


def render_listing_error_line(prefix: str, message: str) -> str:
    return f"{prefix}{CONNECTOR_LAST}{ERROR_ICON} {error_label(message)}"


def render_node_error_line(prefix: str, is_last: bool, name: str, message: str) -> str:
    """Render a node that could not be inspected, keeping its sibling connector."""
    return f"{prefix}{connector(is_last)}{ERROR_ICON} {name} {error_label(message)}"


def render_root_line(root_name: str) -> str:
    return f"{ROOT_ICON} {root_name}"


def render_tree_lines(root_name: str, lines: List[str]) -> List[str]:
    """
    Assemble the full tree rendering: root line followed by the entry lines.

    Args:
        root_name: Display name of the walk root.
        lines: Visual lines accumulated by the walker, in walk order.

    Returns:
        List[str]: Lines ready to be joined with newlines.
    """
    return [render_root_line(root_name), *lines]
