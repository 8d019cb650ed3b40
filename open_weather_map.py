"""OpenWeatherMap Service Provider Module.

This module implements the integration with the OpenWeatherMap current-weather
service. It provides functional utilities for fetching real-time weather data,
a structured data model for internal consumption, a specialized exception
hierarchy to handle API-specific failure modes, and the provider adapter used by
the request handler.

The module follows a clean separation of concerns:
    1. Exception handling for network and response-shape errors.
    2. Data modeling via the OpenWeatherMapResponse class.
    3. API interaction through the fetch_data_open_weather_map function.
    4. Normalization into a WeatherResult through OpenWeatherMapProvider.
"""
from typing import Optional
from urllib.parse import quote

import requests
from weather_service import WeatherServiceError, WeatherResult, Success, Failure

OPEN_WEATHER_MAP_ENDPOINT = "https://api.openweathermap.org/data/2.5/weather"
OPEN_WEATHER_MAP_UNITS = "imperial"


class OpenWeatherMapError(WeatherServiceError):
    """Base exception for errors originating from the OpenWeatherMap service."""
    pass


class OpenWeatherMapRequestError(OpenWeatherMapError):
    """Raised when a network or protocol-level error occurs during an API request.

        Attributes:
            error: The underlying requests exception that triggered this error.
    """
    def __init__(self, error: requests.exceptions.RequestException):
        """Initializes the error with the original requests exception.

                Args:
                    error: The source RequestException.
        """
        super().__init__(str(error))
        self.error = error

    def __repr__(self):
        """Returns a string representation of the OpenWeatherMapRequestError instance, including the wrapped error."""
        return f"{self.__class__.__name__}({repr(self.error)})"


class OpenWeatherMapMalformedResponseError(OpenWeatherMapError):
    """Raised when the API answers but the body carries no usable weather data.

        OpenWeatherMap reports problems such as an unknown city or an invalid key
        as a JSON body with 'cod' and 'message' fields instead of measurements.

        Attributes:
            message: The provider's message, or a description of what was missing.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r})"


class OpenWeatherMapResponse:
    """A data container for weather information retrieved from OpenWeatherMap.

        Attributes:
            city_name: Name of the city as resolved by the provider (e.g., 'London').
            temp: Current temperature in the requested units.
            humidity: Relative humidity in percent.
    """
    def __init__(self, city_name: str, temp: float, humidity: float):
        self.city_name = city_name
        self.temp = temp
        self.humidity = humidity

    def __repr__(self) -> str:
        """Returns a string representation of the OpenWeatherMapResponse instance."""
        return (
            f"{self.__class__.__name__}("
            f"city_name={self.city_name!r}, "
            f"temp={self.temp!r}, "
            f"humidity={self.humidity!r})"
        )


def build_open_weather_map_url(city_name: str, api_key: str, units: str = OPEN_WEATHER_MAP_UNITS) -> str:
    """Builds the current-weather request URL for a city.

        The city name is percent-encoded, so plain names such as 'London' appear
        verbatim as 'q=London'.
    """
    return f"{OPEN_WEATHER_MAP_ENDPOINT}?q={quote(city_name)}&units={units}&appid={api_key}"


def is_measurement(value) -> bool:
    """Whether a JSON value is a usable number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def fetch_data_open_weather_map(city_name: str, api_key: str,
                                session: Optional[requests.Session] = None) -> OpenWeatherMapResponse:
    """Fetches real-time weather data from the OpenWeatherMap service.

        Issues exactly one GET request. There is no retry, and no timeout beyond
        the HTTP client's default.

        Args:
            city_name: The name of the city to query (e.g., "London" or "Tel Aviv").
                Forwarded as-is, including an empty string.
            api_key: The OpenWeatherMap API key.
            session: Optional requests session to send the request with. Defaults
                to the module-level requests API.

        Returns:
            An OpenWeatherMapResponse object populated with the current temperature,
            humidity and the city name echoed by the provider.

        Raises:
            OpenWeatherMapError: If the city name cannot be encoded into the URL.
            OpenWeatherMapRequestError: If the request itself fails (DNS, refused
                connection, timeout...).
            OpenWeatherMapMalformedResponseError: If the body is not JSON or lacks
                numeric 'main' measurements.
    """
    http = session if session is not None else requests

    try:
        url = build_open_weather_map_url(city_name, api_key)
    except UnicodeEncodeError as err:
        raise OpenWeatherMapError(f"City name cannot be encoded: {err}")

    try:
        response = http.get(url)
    except requests.exceptions.RequestException as err:
        raise OpenWeatherMapRequestError(err)

    try:
        data = response.json()
    except ValueError:
        raise OpenWeatherMapMalformedResponseError("Response body is not valid JSON")

    if not isinstance(data, dict):
        raise OpenWeatherMapMalformedResponseError("Response body is not a JSON object")

    # Error bodies (e.g. city not found) may come back with 'cod' and 'message' only
    main_dict = data.get("main")
    if not isinstance(main_dict, dict) or "temp" not in main_dict or "humidity" not in main_dict:
        raise OpenWeatherMapMalformedResponseError(
            str(data.get("message", "Response body has no 'main' measurements")))

    temp = main_dict["temp"]
    humidity = main_dict["humidity"]
    if not is_measurement(temp) or not is_measurement(humidity):
        raise OpenWeatherMapMalformedResponseError(
            f"Response body has unusable measurements: temp={temp!r}, humidity={humidity!r}")

    name = data.get("name")
    return OpenWeatherMapResponse(name if isinstance(name, str) and name else city_name, temp, humidity)


class OpenWeatherMapProvider:
    """WeatherProvider backed by the OpenWeatherMap current-weather API.

        Every provider error is caught here and turned into a Failure, so callers
        only ever branch on the normalized result.
    """
    def __init__(self, api_key: str, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.session = session

    def fetch(self, city_name: str) -> WeatherResult:
        try:
            response = fetch_data_open_weather_map(city_name, self.api_key, self.session)
        except WeatherServiceError as e:
            print(f"OpenWeatherMap lookup for {city_name!r} failed: {e!r}")
            return Failure(repr(e))

        return Success(response.city_name, response.temp, response.humidity)

    def __repr__(self):
        return f"{self.__class__.__name__}(session={self.session!r})"
