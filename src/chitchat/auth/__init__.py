"""
chitchat.auth

Authentication package.

Responsibilities:
- JWT issuing and validation.
- bcrypt password hashing.
- FastAPI auth dependencies (Principal).
"""
