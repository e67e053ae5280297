"""Free text sent by clients is stored as plain text with all markup removed."""
from typing import Optional

import bleach


def clean_text(value: Optional[str]) -> str:
    """Strip every tag and surrounding whitespace; entities stay escaped."""
    return bleach.clean(value or '', tags=set(), strip=True).strip()
