"""Backend package for the Fish Fight server.

This package provides the FastAPI web server: the drawing API, the
WebSocket channel, and the background simulation and broadcast tasks.
"""

__version__ = "1.0.0"
