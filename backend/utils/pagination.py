import math
from typing import Any, Dict, List, Optional, Tuple

from config import settings

def normalize_paging(page_number: Optional[int], page_size: Optional[int]) -> Tuple[int, int, int]:
    """Clamp paging input and return (page_number, page_size, offset)."""
    page_number = max(page_number or 1, 1)
    page_size = page_size or settings.DEFAULT_PAGE_SIZE
    page_size = min(max(page_size, 1), settings.MAX_PAGE_SIZE)
    return page_number, page_size, (page_number - 1) * page_size

def build_page(items: List[Any], total_count: int, page_number: int, page_size: int) -> Dict[str, Any]:
    total_pages = math.ceil(total_count / page_size) if page_size else 0
    return {
        "items": items,
        "total_count": total_count,
        "page_number": page_number,
        "page_size": page_size,
        "total_pages": total_pages,
        "has_next_page": page_number < total_pages,
        "has_previous_page": page_number > 1,
    }
