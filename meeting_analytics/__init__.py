"""
Meeting analytics app built with FastAPI, exposing
- an index.html upload UI,
- a configuration probe for the Gemini API key,
- and upload endpoints that send audio or video to Gemini and return
a transcript plus meeting analytics.
"""

__version__ = "0.1.0"
