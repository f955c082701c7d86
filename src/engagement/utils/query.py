"""Paging helper for repository queries.

Protean querysets return a bounded page of results; callers that need the
complete match set (audiences, due campaigns) walk the pages here.
"""


def fetch_all(queryset, page_size: int = 100, order_by: str = "id") -> list:
    """Return every record matched by ``queryset``, one page at a time."""
    if page_size < 1:
        raise ValueError("page_size must be a positive integer")

    records = []
    offset = 0
    ordered = queryset.order_by(order_by)
    while True:
        page = ordered.offset(offset).limit(page_size).all()
        records.extend(page.items)
        if len(page.items) < page_size:
            break
        offset += page_size

    return records
