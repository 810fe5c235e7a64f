"""App logic package.

Controller and view state for the quote dashboard.
Pure Python - no Streamlit UI calls.
"""

__all__ = ["controller", "dispatch", "quote_display", "services"]
