from __future__ import annotations
import re
from typing import List

COMMENT_MARK = "//"
UINT_RE = re.compile(r"^\d+$")

def is_comment(line: str) -> bool:
    return line.strip().startswith(COMMENT_MARK)

def strip_comment(line: str) -> str:
    """Remove a trailing '//' comment and surrounding whitespace."""
    return line.split(COMMENT_MARK, 1)[0].strip()

def split_tokens(line: str) -> List[str]:
    """Split an instruction on any run of whitespace (tabs included)."""
    return strip_comment(line).split()

def parse_uint(token: str) -> int | None:
    """Non-negative decimal integer, or None when the token is not one."""
    if not UINT_RE.match(token):
        return None
    return int(token)
