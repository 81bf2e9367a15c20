import math

from .exceptions import BadInput


def parse_number(value, field, minimum=0.0):
    """Parse a form/JSON number, rejecting blanks, NaN/inf and values below ``minimum``."""
    try:
        number = float(value)
    except (ValueError, TypeError):
        raise BadInput(f"{field} must be a number, got {value!r}.") from None
    if not math.isfinite(number):
        raise BadInput(f"{field} must be a finite number.")
    if minimum is not None and number < minimum:
        raise BadInput(f"{field} must be at least {minimum:g}.")
    return number


def locked_or_none(model, pk):
    """Re-read ``model`` row ``pk`` under a row lock; None when it does not resolve."""
    if pk in (None, ""):
        return None
    try:
        return model.objects.select_for_update().get(pk=pk)
    except (model.DoesNotExist, ValueError, TypeError):
        return None


def guarded_update(model, pk, guard, **changes):
    """
    Compare-and-swap: apply ``changes`` only while the row still matches ``guard``.

    Returns True when exactly one row was updated.
    """
    return model.objects.filter(pk=pk, **guard).update(**changes) == 1
