"""
geoloop CLI - Command-line interface for the drawing library.

Usage:
    geoloop-cli distance 51.5 -0.1 51.6 -0.2
    geoloop-cli contains config/polygons/london.yaml 51.5 -0.12
    geoloop-cli replay config/gestures/square.yaml --render loop.png
"""

__version__ = "1.0.0"
