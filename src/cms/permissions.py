"""Permission helpers for editor group resolution."""

from __future__ import annotations

from cms.protocols import PermissionReader
from core.constants import EDITOR_ROLE
from core.types import Channel


def read_editor_groups(reader: PermissionReader, channel: Channel) -> tuple[str, ...]:
    """Return the channel's editor groups in platform precedence order.

    Args:
        reader: Permission source.
        channel: Channel to inspect.

    Returns:
        Ordered editor group names; empty when the role has no groups.
    """
    groups = reader.read_groups_for_channel(channel)
    return tuple(groups.get(EDITOR_ROLE, ()))
