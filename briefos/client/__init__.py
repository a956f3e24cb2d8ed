from .resilient_client import NonStructuredResponse, ResilientClient

__all__ = ["NonStructuredResponse", "ResilientClient"]
