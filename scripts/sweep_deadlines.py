"""Auto-accept quality reports whose dispute period has elapsed.

Intended for cron / a scheduled task. Configuration comes from LINGUAQA_* env vars.

Usage:
    python scripts/sweep_deadlines.py
"""

from __future__ import annotations

import logging
import sys

from linguaqa.core.config import AppSettings
from linguaqa.services import build_services


def main() -> int:
    settings = AppSettings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    result = build_services(settings).sweeper.run()
    print(
        f"examined={result.examined} accepted={len(result.auto_accepted)} "
        f"skipped={len(result.failed)} enabled={result.enabled}"
    )
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
