def renumber(items, order_field="display_order"):
    """
    Re-assigns dense order values (0..N-1) following the list's current order.
    Works on anything with an attribute or key named ``order_field``.
    """
    for index, item in enumerate(items):
        if isinstance(item, dict):
            item[order_field] = index
        else:
            setattr(item, order_field, index)
    return items


def next_order(items, order_field="display_order"):
    """One past the highest existing order, or 0 for an empty list."""
    orders = [
        item[order_field] if isinstance(item, dict) else getattr(item, order_field)
        for item in items
    ]
    return max(orders) + 1 if orders else 0
