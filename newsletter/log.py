from __future__ import annotations

import json
import logging

logger = logging.getLogger("newsletter")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format="%(message)s")


def log_event(event: str, level: int = logging.INFO, **fields: object) -> None:
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))
