"""Taxonomía de errores de dominio.

Son subclases de ``HTTPException`` para que los servicios puedan lanzarlas
directamente; ``app.main`` las presenta como ``{"error": ...}``.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Recurso no encontrado"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ValidationError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PermissionDeniedError(HTTPException):
    def __init__(self, detail: str = "No tiene permiso para esta operación"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class InvalidStateError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StoreError(HTTPException):
    def __init__(self, detail: str = "Error de almacenamiento"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
