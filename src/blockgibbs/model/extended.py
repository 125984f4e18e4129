# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Extended values: the entries of a variable's domain.

A domain entry is either a ``Regular`` value, which wraps a concrete value of
the model, or the irregular ``STAR`` marker, which stands for a value that has
not been resolved yet because the model was only partially expanded.
"""
from dataclasses import dataclass
from typing import Any, Union


@dataclass(eq=False, frozen=True)
class Regular:
    """
    A concrete domain value. Values of different types are never equal, so
    ``Regular(True)`` and ``Regular(1)`` are distinct domain entries even
    though ``True == 1`` in Python.
    """

    value: Any

    @property
    def is_regular(self) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Regular):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))

    def __str__(self) -> str:
        return str(self.value)


class Star:
    """The irregular marker. Use the ``STAR`` singleton rather than instances."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_regular(self) -> bool:
        return False

    @property
    def value(self):
        raise ValueError("An irregular value has no concrete value.")

    def __repr__(self) -> str:
        return "STAR"

    __str__ = __repr__

    def __reduce__(self):
        return (Star, ())


STAR = Star()

Extended = Union[Regular, Star]


def extend(value: Any) -> Extended:
    """Wraps ``value`` as a ``Regular`` unless it already is an extended value."""
    if isinstance(value, (Regular, Star)):
        return value
    return Regular(value)
