"""Pytest configuration and fixtures for the weather page tests."""
import base64
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import requests


class FakeLambdaContext:
    """Minimal stand-in for the AWS Lambda context object."""
    aws_request_id = "test-request-id"


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    return FakeLambdaContext()


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock requests Session."""
    return MagicMock(spec=requests.Session)


def create_mock_response(status_code: int = 200, json_data: Any = None,
                         json_error: Optional[Exception] = None) -> MagicMock:
    """Create a configured mock requests Response.

        Args:
            status_code: HTTP status code.
            json_data: Data returned from json().
            json_error: Exception raised from json() instead of returning data.
    """
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


def make_event(method: str = "GET", path: str = "/", body: Optional[str] = None,
               content_type: str = "application/x-www-form-urlencoded",
               base64_encoded: bool = False) -> dict:
    """Build a Lambda function URL event (payload format 2.0)."""
    event = {
        "version": "2.0",
        "rawPath": path,
        "headers": {"content-type": content_type},
        "requestContext": {"http": {"method": method, "path": path, "sourceIp": "127.0.0.1"}},
        "isBase64Encoded": base64_encoded,
    }
    if body is not None:
        event["body"] = base64.b64encode(body.encode("utf-8")).decode("ascii") if base64_encoded else body
    return event
