"""
core/exceptions.py
------------------
Service-layer error taxonomy.

Services raise these; main.py translates them into HTTP responses with a
`{"message": ...}` body. "Not found" is deliberately absent: services
return None / False for it.

  ValidationFailed   → 400  bad input, broken invariant, dangling reference
  MissingTenantError → 401  no id_societe in the caller's identity
  ConflictError      → 409  duplicate natural key, referential guard
"""

from fastapi import status


class BoutiqueError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(BoutiqueError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(BoutiqueError):
    status_code = status.HTTP_409_CONFLICT


class MissingTenantError(BoutiqueError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(
        self, message: str = "IdSociete manquant dans le token. Veuillez vous reconnecter."
    ) -> None:
        super().__init__(message)
