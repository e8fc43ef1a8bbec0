"""
chitchat.api

API package for the Chit Chat backend.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, response envelope and error rendering.
"""
