"""Script de ejecución desde `src/` (`cd src && python -m main list`).

Complementa el script `restful-objects` del paquete instalado.
"""

from __future__ import annotations

import sys

# Rich pinta tablas con caracteres de caja; cp1252 en Windows no los admite.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402


def main() -> None:
    run()


if __name__ == "__main__":
    main()
