"""Lottery number picker with an optional AI commentary."""
from .generate import SamplingExhausted, format_numbers, generate, total_space
from .insight import FALLBACK_INSIGHT, AIInsight, InsightClient, get_number_insights
from .settings import CapacityError, CountError, GeneratorSettings, RangeError, SettingsError

__version__ = "0.1.0"

__all__ = [
    "AIInsight",
    "CapacityError",
    "CountError",
    "FALLBACK_INSIGHT",
    "GeneratorSettings",
    "InsightClient",
    "RangeError",
    "SamplingExhausted",
    "SettingsError",
    "format_numbers",
    "generate",
    "get_number_insights",
    "total_space",
]
