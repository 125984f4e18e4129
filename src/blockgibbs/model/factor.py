# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import itertools
from typing import Any, Callable, Mapping, Sequence, Tuple

import torch
from blockgibbs.model.extended import Extended
from blockgibbs.model.variable import Variable


class Factor:
    """
    A local potential over an ordered tuple of variables. ``values`` holds one
    non-negative weight per joint assignment of the variables' domain indices,
    with one tensor dimension per variable.

    Args:
        variables: The variables the factor ranges over, in tensor axis order.
        values: Anything ``torch.as_tensor`` accepts, of shape
            ``tuple(v.size for v in variables)``.
    """

    def __init__(self, variables: Sequence[Variable], values: Any):
        self.variables: Tuple[Variable, ...] = tuple(variables)
        if len(set(self.variables)) != len(self.variables):
            raise ValueError("A factor cannot reference the same variable twice.")
        values = torch.as_tensor(values, dtype=torch.double)
        expected_shape = tuple(v.size for v in self.variables)
        if tuple(values.shape) != expected_shape:
            raise ValueError(
                f"Factor values have shape {tuple(values.shape)} but the domains of "
                f"{[str(v) for v in self.variables]} require {expected_shape}."
            )
        if torch.any(values < 0) or torch.any(torch.isnan(values)):
            raise ValueError("Factor values must be non-negative numbers.")
        self.values: torch.Tensor = values

    @classmethod
    def from_function(
        cls,
        variables: Sequence[Variable],
        fn: Callable[..., float],
    ) -> Factor:
        """Builds a factor by calling ``fn`` with the extended values of every
        joint assignment of ``variables``."""
        variables = tuple(variables)
        values = torch.zeros(tuple(v.size for v in variables), dtype=torch.double)
        for indices in itertools.product(*(range(v.size) for v in variables)):
            extended = [v.value_at(i) for v, i in zip(variables, indices)]
            values[indices] = float(fn(*extended))
        return cls(variables, values)

    def get_value(self, assignment: Mapping[Variable, int]) -> float:
        index = tuple(assignment[v] for v in self.variables)
        return self.values[index].item()

    def is_feasible(self, assignment: Mapping[Variable, int]) -> bool:
        return self.get_value(assignment) > 0.0

    def get_extended_values(
        self, assignment: Mapping[Variable, int]
    ) -> Tuple[Extended, ...]:
        return tuple(v.value_at(assignment[v]) for v in self.variables)

    def __contains__(self, variable: Variable) -> bool:
        return variable in self.variables

    def __repr__(self) -> str:
        return "Factor(" + ", ".join(str(v) for v in self.variables) + ")"
