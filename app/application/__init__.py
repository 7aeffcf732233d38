"""Application layer: DTOs, repository ports, and services.

Depends on the domain layer only; infrastructure implements the ports.
"""
