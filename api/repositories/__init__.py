"""
API Repositories - Data access abstraction layer

Provides a clean interface for data retrieval that can be swapped
between local file storage (current) and database (future).

Pattern: Repository Pattern
"""
