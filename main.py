"""Lanzador local de geozonas sin instalar el paquete.

Agrega `src/` al path y delega en la CLI de Typer, por ejemplo:
- `python main.py buscar "Av. San Martin" --altura 1500`
- `python main.py ubicar -- -58.45 -34.58`
- `python main.py doctor run --offline`

Con `pip install -e .` alcanza con el comando `geozonas`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
