"""
Service layer abstraction.

Each service encapsulates the persistence logic for a domain so that
API handlers never issue SQL themselves.
"""
