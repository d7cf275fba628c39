"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El esquema del protocolo llega como JSON externo; validarlo en el borde nos
  permite trabajar con estructuras tipadas en el resto del Core.
- La serialización del `ReferenceMap` (export JSON) sale gratis con `model_dump`.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

Category = Literal["commands", "events", "types"]
CATEGORIES: tuple[Category, ...] = ("commands", "events", "types")


class Command(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1, description="Nombre camelCase (p.ej. 'enable').")


class Event(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., min_length=1, description="Nombre camelCase (p.ej. 'scriptParsed').")


class TypeDefinition(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(..., min_length=1, description="Identificador del tipo (p.ej. 'RemoteObject').")


class Domain(BaseModel):
    """Agrupación de commands/events/types del protocolo.

    En el JSON del protocolo el nombre viene en la clave `domain`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str = Field(..., alias="domain", min_length=1, description="Nombre PascalCase (p.ej. 'Network').")
    commands: list[Command] = Field(default_factory=list)
    events: list[Event] = Field(default_factory=list)
    types: list[TypeDefinition] = Field(default_factory=list)

    @field_validator("commands", "events", "types", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ProtocolDescription(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    domains: list[Domain] = Field(default_factory=list)


class RevisionMetadata(BaseModel):
    """Revisión fijada del repositorio de la implementación.

    Se crea una vez por sesión y no se modifica: todo lo que se escanea
    proviene exactamente de `commit_sha`.
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1)
    repo: str = Field(..., min_length=1)
    commit_sha: str = Field(..., min_length=1, description="Hash inmutable del commit.")

    @property
    def commit_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}/commit/{self.commit_sha}"

    def describe(self) -> str:
        """Texto de atribución para mostrar junto a los resultados."""

        return f"data is from commit {self.commit_sha} of {self.owner}/{self.repo}"


class Match(BaseModel):
    """Una ocurrencia de un identificador candidato dentro de un fichero."""

    model_config = ConfigDict(frozen=True)

    path: str
    text: str = Field(..., description="Subcadena exacta encontrada.")
    offset: int = Field(..., ge=0, description="Offset en caracteres dentro del fichero.")
    length: int = Field(..., ge=0)


class ReferenceMap(BaseModel):
    """Resultado del cruce: nombre canónico (`Domain.entity`) -> ocurrencias.

    Una entidad sin ocurrencias no aparece; `matches_for` devuelve lista vacía
    en ese caso para que ausente y vacío se traten igual.
    """

    commands: dict[str, list[Match]] = Field(default_factory=dict)
    events: dict[str, list[Match]] = Field(default_factory=dict)
    types: dict[str, list[Match]] = Field(default_factory=dict)

    def category(self, category: Category) -> dict[str, list[Match]]:
        return getattr(self, category)

    def add(self, category: Category, name: str, match: Match) -> None:
        self.category(category).setdefault(name, []).append(match)

    def matches_for(self, category: Category, name: str) -> list[Match]:
        return list(self.category(category).get(name, []))

    def counts(self) -> dict[str, int]:
        return {category: len(self.category(category)) for category in CATEGORIES}
