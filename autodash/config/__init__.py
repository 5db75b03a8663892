from .loader import load_app_settings
from .model import AppSettings, ChartLimits, InferenceSettings

__all__ = ["load_app_settings", "AppSettings", "ChartLimits", "InferenceSettings"]
