"""Chat token tools: estimate and chunk long text for model context windows."""

__version__ = "0.1.0"
