"""Parser for the timezone request.

Converts node attributes (or a plain dict) to a TimezoneRequest.
"""
from typing import Any, Union

from ..config.node import NodeAttributes
from .schema import TimezoneRequest


class ParseError(Exception):
    """Error reading the timezone request from node attributes."""
    pass


class RequestParser:
    """Extract the timezone request from node data."""

    def parse(self, node: Union[NodeAttributes, dict[str, Any]]) -> TimezoneRequest:
        """
        Parse node attributes into a TimezoneRequest.

        Args:
            node: NodeAttributes or the raw node dict

        Returns:
            TimezoneRequest; an absent timezone becomes ""

        Raises:
            ParseError: If the timezone or role has the wrong type
        """
        if isinstance(node, dict):
            node = NodeAttributes(node)

        zone = node.timezone
        if zone is None:
            zone = ""
        if not isinstance(zone, str):
            raise ParseError(
                f"Invalid timezone value {zone!r}: must be a string"
            )

        role = node.instance_role
        if role is not None and not isinstance(role, str):
            raise ParseError(
                f"Invalid instance role {role!r}: must be a string"
            )

        return TimezoneRequest(zone=zone, role=role)
