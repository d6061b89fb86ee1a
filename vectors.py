import numbers
from typing import List, NamedTuple, Optional, Sequence

from buffer import Buffer, InvalidArgumentError, check_buffer
from primitives import read_double, write_double


class Vector2(NamedTuple):
    x: float
    y: float


class Vector3(NamedTuple):
    x: float
    y: float
    z: float


def _components(vector, names: Sequence[str]) -> List[float]:
    """Collect numeric fields of ``vector`` before anything is written.

    :raises InvalidArgumentError: If a field is missing or not a real number.
    """
    values = []
    for name in names:
        component = getattr(vector, name, None)
        if isinstance(component, bool) or not isinstance(
            component, numbers.Real
        ):
            raise InvalidArgumentError(
                f"Vector must expose numeric {', '.join(names)} fields"
            )
        values.append(float(component))
    return values


def _read_components(buffer: Buffer, count: int) -> Optional[List[float]]:
    values = []
    for _ in range(count):
        value = read_double(buffer)
        if value is None:
            return None
        values.append(value)
    return values


def write_vector2(buffer: Buffer, vector, lossy_zero: bool = True) -> None:
    """Write ``vector.x`` and ``vector.y`` as two doubles (16 bytes).

    :param buffer: Buffer to write to.
    :type buffer: Buffer
    :param vector: Any object with numeric ``x`` and ``y`` attributes.
    :param lossy_zero: Forwarded to :func:`primitives.write_double`.
    :type lossy_zero: bool
    :returns: None
    :rtype: None
    :raises InvalidArgumentError: If ``vector`` lacks numeric fields.
    """
    check_buffer(buffer)
    for value in _components(vector, ("x", "y")):
        write_double(buffer, value, lossy_zero)


def write_vector3(buffer: Buffer, vector, lossy_zero: bool = True) -> None:
    """Write ``vector.x``, ``vector.y`` and ``vector.z`` (24 bytes)."""
    check_buffer(buffer)
    for value in _components(vector, ("x", "y", "z")):
        write_double(buffer, value, lossy_zero)


def read_vector2(buffer: Buffer) -> Optional[Vector2]:
    values = _read_components(check_buffer(buffer), 2)
    return None if values is None else Vector2(*values)


def read_vector3(buffer: Buffer) -> Optional[Vector3]:
    values = _read_components(check_buffer(buffer), 3)
    return None if values is None else Vector3(*values)
