"""
Redirector: maintain a personal short-code -> url database per domain and
publish it to a static redirect backend.
"""

__version__ = "1.0.0"
