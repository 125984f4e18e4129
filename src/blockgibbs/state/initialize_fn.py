# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from collections import defaultdict
from typing import Callable, Dict, List, Sequence

import torch
from blockgibbs.model.factor import Factor
from blockgibbs.model.utils import LogLevel
from blockgibbs.model.variable import Variable


LOGGER = logging.getLogger("blockgibbs.state")

InitializeFn = Callable[[Sequence[Factor], Sequence[Variable]], Dict[Variable, int]]


class InitializationError(ValueError):
    """Raised when no assignment with non-zero weight under every factor is found."""


def _randint(high: int) -> int:
    return int(torch.randint(high, ()).item())


def walk_sat(
    factors: Sequence[Factor],
    variables: Sequence[Variable],
    max_flips: int = 10000,
    noise: float = 0.5,
) -> Dict[Variable, int]:
    """
    Finds a joint assignment under which every factor has a non-zero value,
    using a `WalkSAT <https://en.wikipedia.org/wiki/WalkSAT>`_ style local
    search. A factor with value zero is treated as a violated clause.

    Starting from a uniformly random assignment, each step picks a violated
    factor at random and changes the value of one of its variables: with
    probability ``noise`` a random variable gets a random value, otherwise the
    change that leaves the fewest violated factors is taken.

    Args:
        factors: The factors that must all be satisfied.
        variables: Every variable to assign, including ones no factor mentions.
        max_flips: Number of changes to try before giving up.
        noise: Probability of taking a random rather than a greedy step.

    Returns:
        A domain index for every variable.

    Raises:
        InitializationError: if no feasible assignment was found.
    """
    variables = list(variables)
    variables += [v for f in factors for v in f.variables]
    variables = list(dict.fromkeys(variables))
    assignment = {v: _randint(v.size) for v in variables}
    factors_of: Dict[Variable, List[Factor]] = defaultdict(list)
    for factor in factors:
        for var in factor.variables:
            factors_of[var].append(factor)

    def num_violated(var: Variable) -> int:
        return sum(not f.is_feasible(assignment) for f in factors_of[var])

    for flip in range(max_flips + 1):
        violated = [f for f in factors if not f.is_feasible(assignment)]
        if not violated:
            LOGGER.log(
                LogLevel.DEBUG_SAMPLER.value,
                f"Found a feasible assignment after {flip} flips.",
            )
            return assignment
        if flip == max_flips:
            break
        factor = violated[_randint(len(violated))]
        if len(factor.variables) == 0:
            # a constant zero factor can never be satisfied
            break
        if torch.rand(()).item() < noise:
            var = factor.variables[_randint(len(factor.variables))]
            assignment[var] = _randint(var.size)
            continue
        best_score = None
        best_moves = []
        for var in factor.variables:
            current = assignment[var]
            before = num_violated(var)
            for index in range(var.size):
                if index == current:
                    continue
                assignment[var] = index
                score = num_violated(var) - before
                if best_score is None or score < best_score:
                    best_score, best_moves = score, [(var, index)]
                elif score == best_score:
                    best_moves.append((var, index))
            assignment[var] = current
        if best_moves:
            var, index = best_moves[_randint(len(best_moves))]
            assignment[var] = index

    raise InitializationError(
        f"Cannot find a feasible initial assignment after {max_flips} flips. "
        "The factors may be contradictory."
    )
