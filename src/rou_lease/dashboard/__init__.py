"""Streamlit front end for the lease engine."""
