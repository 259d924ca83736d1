"""
Camp meal-demand calculation package.

The package turns a roster of visiting groups and staff into per-day meal counts
for a facility kitchen, and exposes the calculation through an HTTP API and a CLI.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
