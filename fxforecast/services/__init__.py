"""
FX Forecast Services

Service layer containing all engine logic.
Each service has a defined interface (contract) and implementation.
"""

from fxforecast.services.base import BaseService, ServiceError, ValidationError

__all__ = ["BaseService", "ServiceError", "ValidationError"]
