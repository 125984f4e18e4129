# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""Evidence contributed by auxiliary models that share variables with the
model under inference."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence

from blockgibbs.model.factor import Factor
from blockgibbs.model.variable import Variable


@dataclass(frozen=True)
class DependentModel:
    """
    An auxiliary model whose evidence depends on some variables of the main
    graph.

    Args:
        variables: The shared variables.
        evidence_probability: Returns the probability of the auxiliary model's
            evidence given a regular value for each shared variable, keyed by
            variable. Typically a call into another inference algorithm.
    """

    variables: Sequence[Variable]
    evidence_probability: Callable[[Dict[Variable, Any]], float]


def make_dependent_factor(model: DependentModel) -> Factor:
    """
    The factor weighting each joint assignment of the shared variables by the
    probability of the dependent model's evidence. Assignments involving an
    irregular value get weight 1.
    """
    variables = tuple(model.variables)

    def probability(*values) -> float:
        if not all(v.is_regular for v in values):
            return 1.0
        prob = float(
            model.evidence_probability(
                {var: value.value for var, value in zip(variables, values)}
            )
        )
        if prob < 0.0:
            raise ValueError(
                f"The evidence probability of a dependent model must be non-negative "
                f"but is {prob}."
            )
        return prob

    return Factor.from_function(variables, probability)
