"""
Pydantic schemas for API request and response validation.

Request models decode strictly: JSON types are never coerced.
"""
