"""
API Schemas - Pydantic models for request/response validation

These schemas define the contract between the API and clients: one
Create / Update / Out model per resource, plus the paging envelope and the
error body.
"""
