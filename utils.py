"""Helpers for reading API Gateway / Lambda function URL events (payload format 2.0)."""
import base64
import binascii
import json
from typing import Optional
from urllib.parse import parse_qs


def get_request_method(event: dict) -> str:
    """Returns the upper-cased HTTP method of the request, or an empty string."""
    return event.get('requestContext', {}).get('http', {}).get('method', '').upper()


def get_request_path(event: dict) -> str:
    """Returns the raw request path, defaulting to '/'."""
    return event.get('rawPath') or event.get('requestContext', {}).get('http', {}).get('path') or '/'


def get_header(event: dict, name: str) -> Optional[str]:
    """Looks a request header up case-insensitively."""
    headers = event.get('headers') or {}
    for key, value in headers.items():
        if key.lower() == name.lower():
            return value
    return None


def get_request_body(event: dict) -> str:
    """Returns the request body as text, decoding it first if API Gateway base64-encoded it.

        Bodies that fail to decode are treated as empty.
    """
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        try:
            return base64.b64decode(body).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            print(f"Could not decode base64 request body: {e}")
            return ''
    return body


def get_form_field(event: dict, field_name: str) -> Optional[str]:
    """Extracts a single field from a form-encoded or JSON request body.

        Blank values are kept, so 'city=' yields an empty string while a body
        without the field yields None.

        Args:
            event: The Lambda proxy integration event.
            field_name: The form field to extract (e.g., 'city').

        Returns:
            The field value, or None if the body does not contain it as a string.
    """
    body = get_request_body(event)
    content_type = (get_header(event, 'content-type') or '').split(';')[0].strip().lower()

    if content_type == 'application/json':
        try:
            data = json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            print(f"Could not parse JSON request body: {e}")
            return None
        value = data.get(field_name) if isinstance(data, dict) else None
        # non-string JSON values count as a missing field
        return value if isinstance(value, str) else None

    values = parse_qs(body, keep_blank_values=True).get(field_name)
    return values[0] if values else None
