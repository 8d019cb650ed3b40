"""HTML page rendering for the weather form.

The page has three render states: the bare form (no query yet), the form with a
weather summary, and the form with a generic error message. RenderContext can
only be built through its constructors below, which keeps the weather summary
and the error flag mutually exclusive.
"""
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from weather_service import WeatherResult, Success

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
PAGE_TEMPLATE_NAME = "index.html"

jinja_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def format_measurement(value) -> str:
    """Formats a provider number for display, dropping the '.0' of whole floats (75.0 -> '75')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


jinja_env.filters["measurement"] = format_measurement


class RenderContext:
    """Data handed to the page template.

        Attributes:
            weather: The successful lookup to summarize, or None.
            error: True when a lookup was attempted and failed.
    """
    def __init__(self, weather: Optional[Success], error: bool):
        if weather is not None and error:
            raise ValueError("weather and error cannot both be set")
        self.weather = weather
        self.error = error

    @classmethod
    def page_load(cls) -> "RenderContext":
        return cls(weather=None, error=False)

    @classmethod
    def from_result(cls, result: WeatherResult) -> "RenderContext":
        if isinstance(result, Success):
            return cls(weather=result, error=False)
        return cls(weather=None, error=True)

    def to_dict(self) -> dict:
        return {"weather": self.weather, "error": self.error}

    def __repr__(self):
        return f"{self.__class__.__name__}(weather={self.weather!r}, error={self.error!r})"


def render_page(render_context: RenderContext) -> str:
    """Renders the weather page for the given context into HTML markup."""
    return jinja_env.get_template(PAGE_TEMPLATE_NAME).render(**render_context.to_dict())
