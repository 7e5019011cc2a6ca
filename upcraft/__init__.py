"""Upcraft: skill assessment and career growth, Streamlit front end for the Upcraft REST API."""

__version__ = "0.1.0"
