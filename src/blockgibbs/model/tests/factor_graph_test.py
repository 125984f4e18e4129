# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import torch
from blockgibbs.model.extended import Regular, STAR
from blockgibbs.model.factor import Factor
from blockgibbs.model.factor_graph import FactorGraph, FactorGraphBuilder
from blockgibbs.model.variable import (
    Apply,
    Chain,
    InternalChain,
    Stochastic,
    Variable,
)


def test_select_and_flip():
    builder = FactorGraphBuilder()
    x = builder.select("x", {"a": 0.2, "b": 0.8})
    coin = builder.flip("coin", 0.25)
    graph = builder.build()
    assert graph.variables == (x, coin)
    assert graph.kind_of(x) == Stochastic()
    assert coin.domain == (Regular(True), Regular(False))
    assert graph.factors[1].values.tolist() == [0.25, 0.75]


def test_apply_builds_a_deterministic_factor():
    builder = FactorGraphBuilder()
    x = builder.uniform("x", [1, 2, 3])
    parity = builder.apply("parity", [x], lambda v: v % 2)
    graph = builder.build()
    assert graph.kind_of(parity) == Apply((x,))
    assert parity.domain == (Regular(1), Regular(0))
    apply_factor = graph.factors[-1]
    assert apply_factor.variables == (x, parity)
    assert apply_factor.values.tolist() == [[1.0, 0.0], [0.0, 1.0], [1.0, 0.0]]


def test_apply_propagates_irregular_arguments():
    builder = FactorGraphBuilder()
    x = builder.variable("x", [STAR, 1], Stochastic())
    y = builder.apply("y", [x], lambda v: v + 1)
    assert y.domain == (STAR, Regular(2))
    graph = builder.build()
    assert graph.factors[-1].values.tolist() == [[1.0, 0.0], [0.0, 1.0]]


def test_chain_selects_a_branch():
    builder = FactorGraphBuilder()
    parent = builder.flip("parent", 0.5)
    left = builder.select("left", {0: 0.5, 1: 0.5})
    right = builder.select("right", {1: 0.5, 2: 0.5})
    result = builder.chain("result", parent, {True: left, False: right})
    graph = builder.build()
    assert graph.kind_of(result) == Chain(frozenset({left, right}))
    assert result.domain == (Regular(0), Regular(1), Regular(2))

    choice = graph.variables[3]
    assert graph.variables == (parent, left, right, choice, result)
    assert graph.kind_of(choice) == InternalChain(parent, frozenset({left, right}))
    assert choice.domain == parent.domain
    copy_factor = graph.factors[-2]
    assert copy_factor.variables == (parent, choice)
    assert copy_factor.values.tolist() == [[1.0, 0.0], [0.0, 1.0]]

    chain_factor = graph.factors[-1]
    assert chain_factor.variables == (choice, result, left, right)
    # choice True, result 1, left 1, right 2
    assert chain_factor.get_value({choice: 0, result: 1, left: 1, right: 1}) == 1.0
    # choice False, result 1, left 1, right 2
    assert chain_factor.get_value({choice: 1, result: 1, left: 1, right: 1}) == 0.0


def test_chain_without_branch_is_irregular():
    builder = FactorGraphBuilder()
    parent = builder.flip("parent", 0.5)
    branch = builder.select("branch", {7: 1.0})
    result = builder.chain("result", parent, {True: branch})
    assert result.domain == (Regular(7), STAR)
    chain_factor = builder.build().factors[-1]
    choice = chain_factor.variables[0]
    assert chain_factor.get_value({choice: 1, result: 1, branch: 0}) == 1.0
    assert chain_factor.get_value({choice: 1, result: 0, branch: 0}) == 0.0


def test_observe_and_constrain():
    builder = FactorGraphBuilder()
    x = builder.uniform("x", [0, 1, 2])
    observed = builder.observe(x, 2)
    constraint = builder.constrain(x, lambda v: v + 1.0)
    assert observed.values.tolist() == [0.0, 0.0, 1.0]
    assert constraint.values.tolist() == [1.0, 2.0, 3.0]


def test_from_factors_collects_variables_in_order():
    a = Variable("a", [0, 1])
    b = Variable("b", [0, 1])
    c = Variable("c", [0, 1])
    graph = FactorGraph.from_factors(
        [Factor([b, a], torch.ones(2, 2)), Factor([c, b], torch.ones(2, 2))]
    )
    assert graph.variables == (b, a, c)
    assert graph.kind_of(a) is None
    assert len(graph.factors_touching({c})) == 1
    assert len(graph) == 3
