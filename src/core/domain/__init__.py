"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2),
  las reglas de nombres y los errores tipados.
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""
