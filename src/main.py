"""Script de ejecución.

Permite ejecutar la CLI con `python -m main` desde `src/` durante desarrollo,
además del script `protocol-xref` instalado con el paquete.
"""

from __future__ import annotations

from cli.main import run

if __name__ == "__main__":
    run()
