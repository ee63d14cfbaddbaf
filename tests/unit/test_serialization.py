"""tests/unit/test_serialization.py"""

import json

from urivo import Uri
from urivo.utils.serialization import to_json


def test_to_json(full_url):
    """Test JSON serialization of a URI."""
    data = json.loads(to_json(Uri(full_url)))
    assert data["uri"] == full_url
    assert data["host"] == "example.com"
    assert data["port"] == 81
    assert data["locality"] == "relative"


def test_to_json_empty():
    """Test JSON serialization of an empty URI."""
    data = json.loads(to_json(Uri()))
    assert data == {
        "scheme": None,
        "user": None,
        "password": None,
        "host": None,
        "port": None,
        "path": "",
        "query": None,
        "fragment": None,
        "locality": "relative",
        "uri": "",
    }
