# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""A factor graph and a small builder for assembling one by hand"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Collection,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

import torch
from blockgibbs.model.extended import Extended, extend, STAR
from blockgibbs.model.factor import Factor
from blockgibbs.model.variable import (
    Apply,
    Chain,
    InternalChain,
    Stochastic,
    Variable,
    VariableKind,
)


def _ordered_union(*groups: Iterable[Variable]) -> Tuple[Variable, ...]:
    # dicts keep insertion order, which keeps block construction repeatable
    return tuple(dict.fromkeys(itertools.chain(*groups)))


@dataclass(frozen=True)
class FactorGraph:
    """
    The immutable description of a model handed to inference: its variables,
    the factors over them and, for each variable, the kind of construct that
    produced it. A variable missing from ``kinds`` is treated as an unrecognized
    construct.
    """

    variables: Tuple[Variable, ...]
    factors: Tuple[Factor, ...]
    kinds: Mapping[Variable, VariableKind] = field(default_factory=dict)

    @classmethod
    def from_factors(
        cls,
        factors: Sequence[Factor],
        kinds: Optional[Mapping[Variable, VariableKind]] = None,
    ) -> FactorGraph:
        """Collects the variables of a graph from the factors that mention them."""
        variables = _ordered_union(*(f.variables for f in factors))
        return cls(variables, tuple(factors), dict(kinds or {}))

    def kind_of(self, variable: Variable) -> Optional[VariableKind]:
        return self.kinds.get(variable)

    def factors_touching(self, variables: Collection[Variable]) -> List[Factor]:
        return [f for f in self.factors if any(v in variables for v in f.variables)]

    def __contains__(self, variable: Variable) -> bool:
        return variable in self.variables

    def __len__(self) -> int:
        return len(self.variables)


class FactorGraphBuilder:
    """
    Assembles a ``FactorGraph`` programmatically. Every constructor method
    registers the new variable together with its kind and the factor(s) that
    define it, and returns the variable. Example::

        builder = FactorGraphBuilder()
        x = builder.flip("x", 0.3)
        y = builder.apply("y", [x], lambda x: not x)
        builder.observe(y, True)
        graph = builder.build()
    """

    def __init__(self) -> None:
        self._variables: List[Variable] = []
        self._factors: List[Factor] = []
        self._kinds: Dict[Variable, VariableKind] = {}

    def variable(
        self,
        name: str,
        domain: Iterable[Any],
        kind: Optional[VariableKind] = None,
    ) -> Variable:
        """Registers a variable without any factor. ``kind=None`` leaves its
        kind unrecorded."""
        var = Variable(name, domain)
        self._variables.append(var)
        if kind is not None:
            self._kinds[var] = kind
        return var

    def factor(self, variables: Sequence[Variable], values: Any) -> Factor:
        return self._append(Factor(variables, values))

    def select(self, name: str, probabilities: Mapping[Any, float]) -> Variable:
        """A stochastic variable drawn from ``probabilities``, keyed by value."""
        var = self.variable(name, probabilities.keys(), Stochastic())
        self.factor([var], [float(p) for p in probabilities.values()])
        return var

    def flip(self, name: str, probability: float) -> Variable:
        return self.select(name, {True: probability, False: 1.0 - probability})

    def uniform(self, name: str, values: Iterable[Any]) -> Variable:
        return self.select(name, {value: 1.0 for value in values})

    def apply(
        self, name: str, args: Sequence[Variable], fn: Callable[..., Any]
    ) -> Variable:
        """
        A variable equal to ``fn`` applied to the values of ``args``. Any
        irregular argument makes the result irregular.
        """
        args = tuple(args)
        outcomes: Dict[Tuple[int, ...], Extended] = {}
        for indices in itertools.product(*(range(a.size) for a in args)):
            arg_values = [a.value_at(i) for a, i in zip(args, indices)]
            if all(v.is_regular for v in arg_values):
                outcomes[indices] = extend(fn(*(v.value for v in arg_values)))
            else:
                outcomes[indices] = STAR
        var = self.variable(name, dict.fromkeys(outcomes.values()), Apply(args))
        values = torch.zeros(tuple(a.size for a in args) + (var.size,))
        for indices, outcome in outcomes.items():
            values[indices + (var.index_of(outcome),)] = 1.0
        self.factor(args + (var,), values)
        return var

    def chain(
        self, name: str, parent: Variable, branches: Mapping[Any, Variable]
    ) -> Variable:
        """
        A variable that takes the value of ``branches[p]`` where ``p`` is the
        value of ``parent``. Parent values without a branch, and an irregular
        parent, make the result irregular.

        The branch selection goes through an internal helper variable that
        copies ``parent``. Its kind ties ``parent`` and every branch into one
        block, so the sampler can switch branches together with the result.
        """
        results = tuple(dict.fromkeys(branches.values()))
        selected: Dict[int, Optional[Variable]] = {}
        domain: List[Extended] = []
        for index, parent_value in enumerate(parent.domain):
            branch = None
            if parent_value.is_regular:
                branch = branches.get(parent_value.value)
            selected[index] = branch
            domain.extend(branch.domain if branch is not None else [STAR])
        choice = self.variable(
            f"{name}.choice", parent.domain, InternalChain(parent, frozenset(results))
        )
        self.factor([parent, choice], torch.eye(parent.size))
        var = self.variable(name, dict.fromkeys(domain), Chain(frozenset(results)))

        def consistent(choice_value: Extended, value: Extended, *result_values):
            branch = selected[choice.index_of(choice_value)]
            if branch is None:
                return 1.0 if not value.is_regular else 0.0
            return 1.0 if result_values[results.index(branch)] == value else 0.0

        self._append(Factor.from_function((choice, var) + results, consistent))
        return var

    def observe(self, variable: Variable, value: Any) -> Factor:
        """Conditions ``variable`` on having ``value``."""
        values = torch.zeros(variable.size)
        values[variable.index_of(value)] = 1.0
        return self.factor([variable], values)

    def constrain(self, variable: Variable, fn: Callable[[Any], float]) -> Factor:
        """Weights every regular value of ``variable`` by ``fn``."""
        return self._append(
            Factor.from_function(
                [variable], lambda v: fn(v.value) if v.is_regular else 1.0
            )
        )

    def _append(self, factor: Factor) -> Factor:
        self._factors.append(factor)
        return factor

    def build(self) -> FactorGraph:
        variables = _ordered_union(
            self._variables, *(f.variables for f in self._factors)
        )
        return FactorGraph(variables, tuple(self._factors), dict(self._kinds))
