"""Streamlit views: the world map and the single-volcano detail page."""
