"""Streamlit front end for the inventory products REST API."""

__version__ = "0.1.0"
