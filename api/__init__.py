"""
FastAPI RESTful API for the Bookshelf catalogue.

This package provides:
- Public book listing and lookup
- Token-protected creation, update and deletion of books
- Login issuing signed, time-limited bearer tokens
"""
