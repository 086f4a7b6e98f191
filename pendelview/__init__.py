"""Real-time double pendulum simulator with a pannable, zoomable viewport."""

__version__ = "0.1.0"
