"""Species admin: Streamlit list/form client for the species REST API."""

__version__ = "1.0.0"
