from .factory import MetricsComponentFactory

__all__ = ["MetricsComponentFactory"]
