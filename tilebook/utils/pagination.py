from sqlalchemy.orm import Query
from typing import Any, Dict

MAX_PAGE_SIZE = 200

def paginate(query: Query, page: int, page_size: int) -> Dict[str, Any]:
    """
    Slice a SQLAlchemy query into one page.
    Returns the body expected by PaginatedResponse.
    """
    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

    total = query.count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": items,
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": (total + page_size - 1) // page_size,
    }
