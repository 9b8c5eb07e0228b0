"""Development entry point (without installing the package).

Run the CLI with:
- `python main.py download --start-year 2020 --end-year 2020 --station 1234 --timeframe day`

The code lives in `src/` (src layout), so without an editable install
Python cannot find `canada_climate_bulk`.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent
    src = project_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from canada_climate_bulk.cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
