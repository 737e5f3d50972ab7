from __future__ import annotations

import json
from typing import Any, Dict


def dump_record(data: Dict[str, Any]) -> str:
    """
    Serialise a record dict to the JSON text stored in the `data` column.

    Keys are sorted and separators fixed so the same record always produces
    the same text.
    """

    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def load_record(text: str) -> Dict[str, Any]:
    return json.loads(text)
