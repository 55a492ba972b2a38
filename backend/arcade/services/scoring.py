from arcade.services.errors import InvalidArgument

# Points awarded per item eaten
ITEM_POINTS = {
    'dot': 10,
    'fruit': 50,
    'ghost': 300,
}


def points_for(item) -> int:
    """Map an item kind (case-insensitive) to its point value.

    Raises InvalidArgument for anything outside ITEM_POINTS.
    """
    if not isinstance(item, str) or item.strip().lower() not in ITEM_POINTS:
        raise InvalidArgument(f'Unknown item: {item}')
    return ITEM_POINTS[item.strip().lower()]
