from __future__ import annotations

import re


VERSION_PATTERN = "v<major>.<minor>.<patch>[-suffix]"

_VERSION_RE = re.compile(
    r"^v(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z][0-9A-Za-z.-]*))?$"
)


def is_version(text: str) -> bool:
    return _VERSION_RE.match(text) is not None
