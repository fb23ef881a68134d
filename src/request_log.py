"""Request URL logging (JSONL; thread-safe).

Only filtered URLs are written; credentials and signatures never reach the log.
"""

from __future__ import annotations

import datetime as dt
import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional


class JsonlLogger:
    def __init__(self, path: Optional[str]) -> None:
        self.path = path
        self._lock = threading.Lock()
        if path:
            Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)

    def write(self, rec: Dict[str, Any]) -> None:
        if not self.path:
            return
        line = json.dumps(rec, ensure_ascii=False)
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")


def log_request_url(builder, logger: JsonlLogger) -> str:
    """Write the builder's filtered URL to `logger` and return it."""
    url = builder.filtered_url()
    logger.write(
        {
            "ts": dt.datetime.now(dt.timezone.utc).isoformat(),
            "url": url,
            "url_length": len(url),
            "origins": len(builder.matrix.origins),
            "destinations": len(builder.matrix.destinations),
        }
    )
    return url
