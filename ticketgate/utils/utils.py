"""
Ticketgate Utilities
"""

import hashlib
from typing import List, Optional


def mask_secret(secret: str, length: int = 5) -> str:
    """Return a short SHA-256 hash of a secret for logging."""
    h = hashlib.sha256(str(secret).encode("utf-8")).hexdigest()
    return f"<masked:{h[:length]}>"


def parse_repo_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated list of owner/repo names, dropping blank entries."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(',') if name.strip()]
