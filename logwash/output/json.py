"""
JsonRenderer — Render a wash result as JSON for piping

Supports:
- Pretty-printed JSON output
- Compact mode for piping
"""

import json
from typing import TYPE_CHECKING, Any

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import OutputSpec


class JsonRenderer(BaseRenderer):
    """
    Render data as JSON.

    Records carry only the fields their grammar captured; margins ride
    along as a "margin" key on each record that has one.
    """

    def __init__(self, *args, compact: bool = False, **kwargs):
        """
        Initialize JSON renderer.

        Args:
            compact: If True, output single line (no indentation)
            *args, **kwargs: Passed to BaseRenderer
        """
        super().__init__(*args, **kwargs)
        self.compact = compact

    def render(self, spec: "OutputSpec") -> str:
        data = spec.data
        if hasattr(data, "to_dict"):
            data = data.to_dict()

        if spec.title:
            output = {
                "title": spec.title,
                "data": data
            }
        else:
            output = data

        if self.compact:
            return json.dumps(output, default=self._json_serializer, ensure_ascii=False)
        return json.dumps(
            output,
            indent=2,
            default=self._json_serializer,
            ensure_ascii=False
        )

    def _json_serializer(self, obj: Any) -> Any:
        """Serializer for records, enums and styled text."""
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if hasattr(obj, "plain"):  # rich Text
            return obj.plain
        if hasattr(obj, "value"):  # Enum
            return obj.value
        return str(obj)
