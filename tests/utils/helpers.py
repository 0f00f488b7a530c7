"""Test helper functions."""

import json
from contextlib import contextmanager
from io import BytesIO
from typing import Any, Dict
from unittest.mock import Mock, patch


@contextmanager
def patched_supabase(client, target: str = 'src.services.listing_service.SupabaseClient'):
    """Make `async with SupabaseClient()` yield the given client."""
    with patch(target) as mock_client_class:
        mock_client_class.return_value.__aenter__.return_value = client
        mock_client_class.return_value.__aexit__.return_value = None
        yield mock_client_class


def make_handler(handler_cls, path: str, headers: Dict[str, str] = None):
    """Build an endpoint handler without a socket, ready for do_GET."""
    h = handler_cls.__new__(handler_cls)
    h.path = path
    h.headers = headers or {}
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    return h


def response_status(h) -> int:
    return h.send_response.call_args[0][0]


def response_json(h) -> Dict[str, Any]:
    h.wfile.seek(0)
    return json.loads(h.wfile.read().decode('utf-8'))
