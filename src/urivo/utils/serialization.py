"""utils/serialization.py

Serialization utilities for Urivo (plain data, JSON).
"""

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from urivo.uri import Uri


def to_json(uri: "Uri") -> str:
    """Serializes the components of a URI, plus its rendering, to JSON."""
    data = uri.as_dict()
    data["uri"] = uri.get_uri()
    return json.dumps(data)
