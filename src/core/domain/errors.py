"""Errores tipados del Core.

Por qué una jerarquía:
- Todos los fallos observables nacen en la capa de fetch; la CLI solo
  necesita capturar `FetchError`.
- `ResolutionError` distingue el fallo al fijar la revisión del fallo al
  descargar un fichero concreto.
"""

from __future__ import annotations


class FetchError(Exception):
    """Un recurso remoto no pudo obtenerse en la revisión fijada."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def for_file(cls, path: str, status_code: int | None, reason: str | None = None) -> "FetchError":
        if status_code is None:
            message = f"Failed to fetch {path}: {reason or 'transport error'}"
        else:
            message = f"Failed to fetch {path}: {status_code} {reason or ''}".rstrip()
        return cls(message, path=path, status_code=status_code, reason=reason)


class ResolutionError(FetchError):
    """La consulta de la rama no devolvió un commit utilizable."""

    def __init__(
        self,
        *,
        owner: str,
        repo: str,
        branch: str,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        detail = f"{status_code} {reason or ''}".strip() if status_code is not None else (reason or "transport error")
        super().__init__(
            f"Failed to resolve {owner}/{repo}@{branch}: {detail}",
            status_code=status_code,
            reason=reason,
        )
        self.owner = owner
        self.repo = repo
        self.branch = branch
