from arcade.services.errors import ValidationFailed


def _to_id(value):
    # bool is an int subclass; JSON true/false is never an id
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value)
    return None


def require(data, ids=(), **fields):
    """Check that each named field is present and well typed.

    ``fields`` maps a field name to the message reported when it is invalid.
    Fields listed in ``ids`` must hold an integer id; every other field must
    be a non-blank string. Raises ValidationFailed listing every bad field.
    """
    data = data if isinstance(data, dict) else {}
    errors = []
    for name, message in fields.items():
        value = data.get(name)
        if name in ids:
            ok = _to_id(value) is not None
        else:
            ok = isinstance(value, str) and bool(value.strip())
        if not ok:
            errors.append({'param': name, 'msg': message})
    if errors:
        raise ValidationFailed(errors)
    return data


def as_int(data, name):
    """Coerce an id field to int, reporting it as a validation error otherwise."""
    value = _to_id(data.get(name))
    if value is None:
        raise ValidationFailed([{'param': name, 'msg': f'{name} must be an integer id'}])
    return value
