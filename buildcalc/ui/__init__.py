"""
UI Module
=========

Streamlit calculator pages:
- Beam Size
- Joist Span
- Wire Size
- Stair Layout
"""
