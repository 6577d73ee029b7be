"""Core logic for the JSON Table Converter.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- read and unify JSON record arrays
- edit the column configuration
- export records as delimited text or SQL
"""
