"""Entry point de desarrollo sin instalar el paquete.

Uso:
- `python -m main list`
- `python -m main add "Widget" --data "color:blue, price:9"`

Los paquetes `cli`, `core` y `adapters` viven en `src/`; sin `pip install -e .`
hay que añadir ese directorio al path antes de importar la CLI.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
