from .exceptions import ChartParseError
from .models import Chart, Section
from .parser import parse_chart

__all__ = ["Chart", "ChartParseError", "Section", "parse_chart"]
