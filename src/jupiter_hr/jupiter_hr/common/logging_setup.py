from __future__ import annotations

import logging


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=str(level or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
