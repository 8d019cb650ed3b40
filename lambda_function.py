"""AWS Lambda Handler and Request Orchestration Module.

This module acts as the entry point for the weather page. It manages the
end-to-end lifecycle of an HTTP request, including:
    1. Routing GET / (bare form) and POST / (form submission).
    2. Extracting the 'city' form field from the request body.
    3. Delegating the lookup to a WeatherProvider and choosing the render state.
    4. Rendering the HTML page and wrapping it into an HTTP response.

A weather lookup failure is never reported through the status code: page loads,
successful lookups and failed lookups all answer 200, and only the rendered
content differs.

Environment Requirements:
    - OPENWEATHER_API_KEY, or OPENWEATHER_API_KEY_PARAMETER naming an SSM SecureString.
"""
from typing import Optional, TYPE_CHECKING

# makes AWS specific type hinting available in IDE, without bundling the library when deploying to the cloud
if TYPE_CHECKING:
    from aws_lambda_typing.context import Context

import config
import utils
from open_weather_map import OpenWeatherMapProvider
from page import RenderContext, render_page
from weather_service import WeatherProvider, Success

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
ALLOWED_METHODS = ("GET", "POST")


def get_request_city_param(event: dict) -> Optional[str]:
    """Retrieves the 'city' form field from the incoming request body."""
    return utils.get_form_field(event, 'city')


def get_response(status_code: int, context: "Context", body: str,
                 content_type: str = HTML_CONTENT_TYPE, **headers) -> dict:
    """Constructs a standardized HTTP response for the Lambda Gateway.

        Args:
            status_code: HTTP status code to return.
            context: AWS Lambda context object (used for Request ID).
            body: The response body.
            content_type: MIME type for the response header.
            **headers: Additional response headers.

        Returns:
            A dictionary formatted as an AWS Lambda HTTP response.
    """
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': content_type,
            "X-Request-ID": context.aws_request_id
        } | headers,
        'body': body
    }


def handle_not_found(context: "Context") -> dict:
    """Returns a plain HTTP 404 Not Found response for paths other than '/'."""
    return get_response(404, context, "Not Found", content_type="text/plain; charset=utf-8")


def handle_method_not_allowed(context: "Context") -> dict:
    """Returns a plain HTTP 405 Method Not Allowed response listing the supported methods."""
    return get_response(405, context, "Method Not Allowed", content_type="text/plain; charset=utf-8",
                        Allow=", ".join(ALLOWED_METHODS))


class WeatherPageHandler:
    """Resolves weather page requests to rendered responses.

        Attributes:
            provider: The WeatherProvider consulted on form submissions.
    """
    def __init__(self, provider: WeatherProvider):
        self.provider = provider

    def handle_page_load(self) -> RenderContext:
        return RenderContext.page_load()

    def handle_form_submission(self, city: str) -> RenderContext:
        """Looks the city up and builds the matching render context.

            The city is forwarded without validation; an empty string is left to
            the provider to reject.
        """
        print(f"Weather requested for city: {city!r}")
        result = self.provider.fetch(city)

        if not isinstance(result, Success):
            print(f"Weather lookup failed: {result!r}")

        return RenderContext.from_result(result)

    def handle(self, event: dict, context: "Context") -> dict:
        """Routes a Lambda proxy event and returns the HTTP response."""
        method = utils.get_request_method(event)
        path = utils.get_request_path(event)

        print(f"Received {method} {path}")

        if path != '/':
            return handle_not_found(context)

        if method == 'GET':
            render_context = self.handle_page_load()
        elif method == 'POST':
            city = get_request_city_param(event)
            if city is None:
                print("Form submission missing 'city' field")
                render_context = self.handle_page_load()
            else:
                render_context = self.handle_form_submission(city)
        else:
            return handle_method_not_allowed(context)

        return get_response(200, context, render_page(render_context))


_default_handler: Optional[WeatherPageHandler] = None


def get_default_handler() -> WeatherPageHandler:
    """Builds the OpenWeatherMap-backed handler on first use and reuses it across warm invocations.

        Raises:
            config.ConfigurationError: If no API key is configured.
    """
    global _default_handler
    if _default_handler is None:
        _default_handler = WeatherPageHandler(OpenWeatherMapProvider(config.load_api_key()))
    return _default_handler


def lambda_handler(event, context: "Context") -> dict:
    """The primary execution entry point for the AWS Lambda function."""
    return get_default_handler().handle(event, context)
