# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import copy

import pytest
from blockgibbs.model.extended import extend, Regular, STAR, Star
from blockgibbs.model.variable import Apply, Stochastic, Variable


def test_domain_is_extended():
    var = Variable("x", [0, 1, STAR])
    assert var.size == 3
    assert var.domain == (Regular(0), Regular(1), STAR)
    assert var.index_of(1) == 1
    assert var.index_of(Regular(1)) == 1
    assert var.index_of(STAR) == 2
    assert var.value_at(0).value == 0
    assert var.has_irregular
    assert not Variable("y", [True, False]).has_irregular


def test_invalid_domains():
    with pytest.raises(ValueError):
        Variable("empty", [])
    with pytest.raises(ValueError):
        Variable("dup", [1, 1])
    with pytest.raises(ValueError):
        Variable("x", [0, 1]).index_of(2)


def test_identity_semantics():
    a = Variable("x", [0, 1])
    b = Variable("x", [0, 1])
    assert a != b
    assert len({a, b}) == 2
    # copies keep the identity that keys the chain state
    assert copy.copy(a) is a
    assert copy.deepcopy([a])[0] is a


def test_star_is_a_singleton():
    assert Star() is STAR
    assert not STAR.is_regular
    assert extend(STAR) is STAR
    assert extend(Regular(3)) == Regular(3)
    with pytest.raises(ValueError):
        STAR.value


def test_kinds_compare_by_value():
    x = Variable("x", [0, 1])
    assert Apply((x,)) == Apply((x,))
    assert Stochastic() == Stochastic()


def test_domain_values_are_typed():
    assert Regular(True) != Regular(1)
    assert Regular(1) == Regular(1)
    mixed = Variable("mixed", [1, True, 1.5])
    assert mixed.index_of(True) == 1
    assert mixed.index_of(1) == 0
    with pytest.raises(ValueError):
        Variable("x", [0, 1]).index_of(True)
