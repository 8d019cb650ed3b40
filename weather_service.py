"""Weather service abstraction shared by the request handler and the providers.

This module defines the pieces every weather provider integration agrees on:
    1. A common exception base class for provider-specific failures.
    2. The normalized WeatherResult variants (Success and Failure).
    3. The WeatherProvider interface the request handler depends on.

Example:
    result = provider.fetch(city)
    if isinstance(result, Success):
        print(f"{result.city_name}: {result.temperature}")
"""
from typing import Protocol, Union


class WeatherServiceError(Exception):
    """Base class for any exception raised by a weather service.

        Catching this exception will intercept any error specifically defined
        within this application, regardless of the underlying service provider.
    """
    pass


class Success:
    """Current weather conditions for a city, as reported by the provider.

        Values are kept exactly as the provider returned them; no unit
        conversion or rounding is applied.

        Attributes:
            city_name: The city name echoed back by the provider.
            temperature: Current temperature in the configured units.
            humidity: Relative humidity in percent.
    """
    def __init__(self, city_name: str, temperature: float, humidity: float):
        self.city_name = city_name
        self.temperature = temperature
        self.humidity = humidity

    def __eq__(self, other):
        return (isinstance(other, Success)
                and (self.city_name, self.temperature, self.humidity)
                == (other.city_name, other.temperature, other.humidity))

    def __repr__(self) -> str:
        """Returns a string representation of the Success instance."""
        return (
            f"{self.__class__.__name__}("
            f"city_name={self.city_name!r}, "
            f"temperature={self.temperature!r}, "
            f"humidity={self.humidity!r})"
        )


class Failure:
    """A weather lookup that did not produce usable data.

        Attributes:
            reason: Internal description of the cause. Logged, never shown to the user.
    """
    def __init__(self, reason: str):
        self.reason = reason

    def __eq__(self, other):
        return isinstance(other, Failure) and self.reason == other.reason

    def __repr__(self) -> str:
        """Returns a string representation of the Failure instance."""
        return f"{self.__class__.__name__}(reason={self.reason!r})"


WeatherResult = Union[Success, Failure]


class WeatherProvider(Protocol):
    """Anything that can turn a city name into a WeatherResult."""

    def fetch(self, city_name: str) -> WeatherResult:
        ...
