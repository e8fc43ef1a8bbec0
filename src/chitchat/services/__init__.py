"""
chitchat.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Apply domain rules between the HTTP layer and the repositories.
"""
