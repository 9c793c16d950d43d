"""Product catalog backend: validated product persistence behind a FastAPI surface."""

__version__ = "0.1.0"
