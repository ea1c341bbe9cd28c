from aulas.utils.errors import ValidationError


def is_blank(value):
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    return False


def require_fields(data, *fields):
    """Raise ValidationError if any of ``fields`` is absent or blank in ``data``."""
    missing = [f for f in fields if is_blank(data.get(f))]
    if missing:
        raise ValidationError('Missing data: ' + ', '.join(missing))


def to_int(value, field):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')
