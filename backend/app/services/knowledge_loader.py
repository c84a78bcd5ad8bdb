"""
Knowledge document loading.

The document is read once at startup and kept on app.state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from app.core.logger import logger


def load_knowledge_document(path: str | Path) -> Any:
    """
    Load the portfolio knowledge JSON.

    A missing or unparsable file yields an empty document so the server can
    still start; the portfolio prompt then simply has nothing to answer from.
    """
    file_path = Path(path)
    try:
        with file_path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        logger.warning(f"Knowledge document not found at {file_path}; using empty document")
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(f"Knowledge document at {file_path} could not be read: {exc}")
        return {}

    logger.info(f"Loaded knowledge document from {file_path}")
    return data
