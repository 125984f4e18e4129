# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import dataclasses
from typing import Any, FrozenSet, Iterable, Tuple, Union

from blockgibbs.model.extended import extend, Extended


@dataclasses.dataclass(eq=False, frozen=True)
class Variable:
    """
    A discrete random quantity of the factor graph. Variables are compared and
    hashed by identity: two variables with the same name and domain are still
    different variables.

    Args:
        name: Human readable name, used for printing only.
        domain: Ordered, non-empty collection of values. Plain values are
            wrapped as ``Regular``; ``STAR`` marks an irregular entry.
    """

    name: str
    domain: Tuple[Extended, ...]

    def __init__(self, name: str, domain: Iterable[Any]):
        extended = tuple(extend(value) for value in domain)
        if len(extended) == 0:
            raise ValueError(f"Variable {name} must have a non-empty domain.")
        if len(set(extended)) != len(extended):
            raise ValueError(f"Variable {name} has duplicate domain values.")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "domain", extended)

    @property
    def size(self) -> int:
        return len(self.domain)

    def value_at(self, index: int) -> Extended:
        return self.domain[index]

    def index_of(self, value: Any) -> int:
        try:
            return self.domain.index(extend(value))
        except ValueError:
            raise ValueError(f"{value} is not in the domain of {self}.") from None

    @property
    def has_irregular(self) -> bool:
        return any(not value.is_regular for value in self.domain)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Variable({self.name})"

    # identity is the key of a variable, so copies must not create new ones
    def __copy__(self) -> Variable:
        return self

    def __deepcopy__(self, memo) -> Variable:
        return self


# The kind of a variable decides its deterministic parents, i.e. the variables
# whose blocks it should be folded into.


@dataclasses.dataclass(frozen=True)
class Stochastic:
    """A variable with its own randomness."""


@dataclasses.dataclass(frozen=True)
class Apply:
    """The result of applying a pure function to ``args``."""

    args: Tuple[Variable, ...]


@dataclasses.dataclass(frozen=True)
class Chain:
    """The result of a conditional branch; ``results`` are the branch outcomes."""

    results: FrozenSet[Variable]


@dataclasses.dataclass(frozen=True)
class InternalChain:
    """A helper variable that links a branch's ``parent`` to its ``results``."""

    parent: Variable
    results: FrozenSet[Variable]


VariableKind = Union[Stochastic, Apply, Chain, InternalChain]
