from types import SimpleNamespace

import pytest

from buffer import Buffer, InvalidArgumentError
from vectors import (
    Vector2,
    Vector3,
    read_vector2,
    read_vector3,
    write_vector2,
    write_vector3,
)


def test_vector3_roundtrip(buf):
    write_vector3(buf, Vector3(1, 2, 3))
    assert len(buf) == 24
    buf.flip()
    assert read_vector3(buf) == (1.0, 2.0, 3.0)


def test_vector2_roundtrip(buf):
    write_vector2(buf, Vector2(-4.25, 1e6))
    assert len(buf) == 16
    buf.flip()
    v = read_vector2(buf)
    assert isinstance(v, Vector2)
    assert v.x == -4.25 and v.y == 1e6


def test_any_object_with_fields_is_accepted(buf):
    write_vector3(buf, SimpleNamespace(x=0.5, y=1.5, z=2.5))
    write_vector2(buf, Vector3(7, 8, 9))
    buf.flip()
    assert read_vector3(buf) == Vector3(0.5, 1.5, 2.5)
    assert read_vector2(buf) == Vector2(7.0, 8.0)


def test_near_zero_components_collapse(buf):
    write_vector2(buf, Vector2(0.001, 5))
    buf.flip()
    assert read_vector2(buf) == (0.0, 5.0)


def test_exact_zero_components(buf):
    write_vector2(buf, Vector2(0.001, 5), lossy_zero=False)
    buf.flip()
    assert read_vector2(buf) == (0.001, 5.0)


@pytest.mark.parametrize(
    "bad",
    [
        None,
        (1, 2, 3),
        SimpleNamespace(x=1, y=2),
        SimpleNamespace(x=1, y="2", z=3),
        SimpleNamespace(x=True, y=2, z=3),
    ],
)
def test_vector3_rejects_bad_input_before_writing(buf, bad):
    with pytest.raises(InvalidArgumentError):
        write_vector3(buf, bad)
    assert len(buf) == 0


def test_vector2_rejects_missing_y(buf):
    with pytest.raises(InvalidArgumentError):
        write_vector2(buf, SimpleNamespace(x=1.0))
    assert len(buf) == 0


def test_vector_rejects_non_buffer():
    with pytest.raises(InvalidArgumentError):
        write_vector2(bytearray(), Vector2(1, 2))


def test_truncated_vector_reads_none():
    b = Buffer(bytes(20))
    assert read_vector3(b) is None
