# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
import torch
from blockgibbs.model.factor import Factor
from blockgibbs.model.factor_graph import FactorGraphBuilder
from blockgibbs.model.variable import Variable
from blockgibbs.state import InitializationError, walk_sat


@pytest.mark.parametrize("noise", [0.2, 0.5, 1.0])
def test_walk_sat_finds_feasible_assignment(noise):
    builder = FactorGraphBuilder()
    xs = [builder.uniform(f"x{i}", range(4)) for i in range(5)]
    total = builder.apply("total", xs[:3], lambda a, b, c: a + b + c)
    builder.observe(total, 7)
    builder.constrain(xs[4], lambda v: 1.0 if v == 3 else 0.0)
    graph = builder.build()

    assignment = walk_sat(graph.factors, graph.variables, noise=noise)
    assert set(assignment) == set(graph.variables)
    assert all(f.is_feasible(assignment) for f in graph.factors)
    assert sum(xs[i].value_at(assignment[xs[i]]).value for i in range(3)) == 7
    assert assignment[xs[4]] == 3


def test_walk_sat_assigns_variables_without_factors():
    lonely = Variable("lonely", [0, 1, 2])
    assignment = walk_sat([], [lonely])
    assert 0 <= assignment[lonely] < 3


def test_walk_sat_adds_variables_of_factors():
    x = Variable("x", [0, 1])
    assignment = walk_sat([Factor([x], [0.0, 1.0])], [])
    assert assignment == {x: 1}


def test_walk_sat_infeasible():
    builder = FactorGraphBuilder()
    x = builder.flip("x", 0.5)
    builder.observe(x, True)
    builder.observe(x, False)
    graph = builder.build()
    with pytest.raises(InitializationError):
        walk_sat(graph.factors, graph.variables, max_flips=50)
    # an InitializationError is a ValueError
    with pytest.raises(ValueError):
        walk_sat([Factor([], torch.tensor(0.0))], [])
