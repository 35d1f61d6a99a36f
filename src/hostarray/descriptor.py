"""Typed, shape-tagged views over host arrays.

The host hands the adapter numpy arrays, Python scalars or strings.  Each is
wrapped in an :class:`ArrayDescriptor` exposing the element class, the host
dimensions (always at least two, as the host reports them) and a read-only
view of the backing storage.  Descriptors never copy numeric data that is
already a numpy array and never allow writes through to it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

CLASS_INT32 = "int32"
CLASS_INT64 = "int64"
CLASS_DOUBLE = "double"
CLASS_CHAR = "char"
CLASS_LOGICAL = "logical"
CLASS_STRING = "string"

_NUMERIC_CLASSES = {
    np.dtype(np.int32): CLASS_INT32,
    np.dtype(np.int64): CLASS_INT64,
    np.dtype(np.float64): CLASS_DOUBLE,
    np.dtype(np.complex128): CLASS_DOUBLE,
}


@dataclass(frozen=True)
class ArrayDescriptor:
    """Read-only handle to a host array."""

    class_id: str
    dims: Tuple[int, ...]
    is_complex: bool
    data: np.ndarray

    @property
    def ndim(self) -> int:
        return len(self.dims)

    @property
    def numel(self) -> int:
        return math.prod(self.dims)

    def view(self) -> np.ndarray:
        """Return the elements as a flat read-only array in column-major order."""

        flat = np.ravel(self.data, order="F")
        flat.flags.writeable = False
        return flat

    def scalar(self) -> Any:
        """Return the first element as a Python scalar."""

        return self.view()[0].item()

    def text(self) -> str:
        if self.class_id != CLASS_CHAR:
            raise TypeError(f"descriptor of class {self.class_id!r} holds no text")
        return "".join(self.view().tolist())


def _host_dims(shape: Tuple[int, ...]) -> Tuple[int, ...]:
    if len(shape) == 0:
        return (1, 1)
    if len(shape) == 1:
        return (shape[0], 1)
    dims = [int(extent) for extent in shape]
    while len(dims) > 2 and dims[-1] == 1:
        dims.pop()
    return tuple(dims)


def _readonly(array: np.ndarray, dims: Tuple[int, ...]) -> np.ndarray:
    data = array.reshape(dims, order="F")
    data.flags.writeable = False
    return data


def _char_descriptor(text: str) -> ArrayDescriptor:
    dims = (1, len(text)) if text else (0, 0)
    chars = np.array(list(text), dtype="<U1").reshape(dims)
    return ArrayDescriptor(class_id=CLASS_CHAR, dims=dims, is_complex=False, data=_readonly(chars, dims))


def _classify(array: np.ndarray) -> Tuple[str, bool]:
    dtype = array.dtype
    if dtype in _NUMERIC_CLASSES:
        return _NUMERIC_CLASSES[dtype], dtype.kind == "c"
    if dtype.kind == "b":
        return CLASS_LOGICAL, False
    if dtype.kind == "U":
        return (CLASS_CHAR if dtype.itemsize <= 4 else CLASS_STRING), False
    return dtype.name, dtype.kind == "c"


def describe(value: Any) -> ArrayDescriptor:
    """Wrap ``value`` in an :class:`ArrayDescriptor`.

    ``None`` stands for the host's empty matrix and maps to a ``0x0`` double
    array.  Python ``int``/``float``/``complex`` scalars map to int64, double
    and complex double respectively; an ``int`` too wide for int64 keeps the
    ``object`` class.  Trailing singleton dimensions past the second are
    dropped, as the host does.
    """

    if isinstance(value, ArrayDescriptor):
        return value
    if value is None:
        array = np.empty((0, 0), dtype=np.float64)
    elif isinstance(value, str):
        return _char_descriptor(value)
    elif isinstance(value, bool):
        array = np.asarray(value, dtype=np.bool_)
    elif isinstance(value, int):
        try:
            array = np.asarray(value, dtype=np.int64)
        except OverflowError:
            # wider than int64; left unclassified
            array = np.asarray(value, dtype=object)
    elif isinstance(value, float):
        array = np.asarray(value, dtype=np.float64)
    elif isinstance(value, complex):
        array = np.asarray(value, dtype=np.complex128)
    else:
        try:
            array = np.asarray(value)
        except ValueError:
            # ragged sequences
            array = np.asarray(value, dtype=object)

    if array.dtype.kind == "U" and array.ndim == 0:
        return _char_descriptor(str(array.item()))

    class_id, is_complex = _classify(array)
    dims = _host_dims(array.shape)
    return ArrayDescriptor(
        class_id=class_id,
        dims=dims,
        is_complex=is_complex,
        data=_readonly(array, dims),
    )


__all__ = [
    "ArrayDescriptor",
    "CLASS_CHAR",
    "CLASS_DOUBLE",
    "CLASS_INT32",
    "CLASS_INT64",
    "CLASS_LOGICAL",
    "CLASS_STRING",
    "describe",
]
