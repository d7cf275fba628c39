"""Traducción entre convenciones de nombres.

El protocolo usa `Domain.camelCase`; la implementación usa identificadores
con scope (`m::domain::PascalCaseRequest`). Funciones puras, sin estado.
Ambas asumen nombres no vacíos (el esquema del protocolo es de confianza).
"""

from __future__ import annotations


def leading_lowercase(name: str) -> str:
    """PascalCase -> camelCase tocando solo el primer carácter."""

    return name[0].lower() + name[1:]


def leading_uppercase(name: str) -> str:
    """camelCase -> PascalCase tocando solo el primer carácter."""

    return name[0].upper() + name[1:]


def quote_cpp_string(value: str) -> str:
    """Literal de cadena C++ tal como aparecería en el código fuente."""

    return '"' + value.replace('"', '\\"') + '"'


def canonical_name(domain: str, entity: str) -> str:
    return f"{domain}.{entity}"
