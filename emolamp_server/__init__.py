"""EmoLamp message relay and telemetry statistics server."""

__version__ = "1.0.0"
