"""Entry point de desarrollo (sin instalar el paquete).

Permite ejecutar la CLI con:
- `python main.py --proxy socks5://127.0.0.1:1080 clone --org <org>`

El código vive en `src/` (layout tipo "src"); sin `pip install -e .` Python
no encuentra `cli`, `core`, etc., así que añadimos `src/` al path.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
