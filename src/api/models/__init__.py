"""
API models (Pydantic DTOs) for the adjudication API.
"""
