"""Reading ledger state payloads from JSON or YAML files.

JSON is valid YAML, so a single safe_load handles both formats. The result
is handed to Ledger.bulk_load() unchanged; shape validation happens there.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from .core.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def read_state_file(path: Path | str) -> dict[str, Any]:
    """
    Read a ledger state payload from disk.

    Args:
        path: JSON or YAML file holding a mapping-of-mappings payload

    Returns:
        The parsed mapping

    Raises:
        InvalidInputError: if the file is missing, unparseable, or not a mapping
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise InvalidInputError(f"state file not found: {path}")
    except yaml.YAMLError as e:
        raise InvalidInputError(f"could not parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInputError(
            f"{path} must contain a mapping, got {type(data).__name__}"
        )

    logger.info(f"Read state file {path}")
    return data
