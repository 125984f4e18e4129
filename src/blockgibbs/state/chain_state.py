# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping, MutableMapping

from blockgibbs.model.extended import Extended
from blockgibbs.model.variable import Variable


class ChainState(MutableMapping[Variable, int]):
    """
    The current joint assignment of a Markov chain: the domain index of every
    variable of the graph. A ChainState is owned by a single sampler and is
    updated in place, one block at a time, for the whole run.

    The set of variables is fixed at construction; assigning a variable that is
    not part of the state raises ``KeyError`` and assigning an index outside of
    the variable's domain raises ``IndexError``.

    Args:
        assignment: A domain index for every variable of the chain.
    """

    def __init__(self, assignment: Mapping[Variable, int]):
        self._values: Dict[Variable, int] = {}
        for variable, index in assignment.items():
            self._values[variable] = self._check_index(variable, index)

    @classmethod
    def from_assignment(
        cls, variables: Iterable[Variable], assignment: Mapping[Variable, int]
    ) -> ChainState:
        """Creates the state of ``variables`` from an initializer's assignment,
        which must cover every one of them."""
        variables = list(variables)
        missing = [str(v) for v in variables if v not in assignment]
        if missing:
            raise ValueError(f"The initial assignment has no value for {missing}.")
        return cls({v: assignment[v] for v in variables})

    @staticmethod
    def _check_index(variable: Variable, index: int) -> int:
        index = int(index)
        if not 0 <= index < variable.size:
            raise IndexError(
                f"Index {index} is outside of the domain of {variable} "
                f"(size {variable.size})."
            )
        return index

    def __getitem__(self, variable: Variable) -> int:
        return self._values[variable]

    def __setitem__(self, variable: Variable, index: int) -> None:
        if variable not in self._values:
            raise KeyError(f"{variable} is not part of the chain state.")
        self._values[variable] = self._check_index(variable, index)

    def __delitem__(self, variable: Variable) -> None:
        raise TypeError("Variables cannot be removed from a chain state.")

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def value(self, variable: Variable) -> Extended:
        """The extended value the variable currently holds."""
        return variable.value_at(self._values[variable])

    def assign(self, values: Mapping[Variable, int]) -> None:
        """Writes the new indices of a block; nothing is written if any of
        them is invalid."""
        checked = {}
        for variable, index in values.items():
            if variable not in self._values:
                raise KeyError(f"{variable} is not part of the chain state.")
            checked[variable] = self._check_index(variable, index)
        self._values.update(checked)

    def snapshot(self) -> Dict[Variable, int]:
        """An independent copy of the current indices."""
        return dict(self._values)

    def __repr__(self) -> str:
        return (
            "ChainState("
            + ", ".join(f"{v}={self.value(v)}" for v in self._values)
            + ")"
        )
