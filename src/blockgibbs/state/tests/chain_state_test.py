# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import pytest
from blockgibbs.model.extended import Regular, STAR
from blockgibbs.model.variable import Variable
from blockgibbs.state import ChainState


@pytest.fixture
def variables():
    return Variable("x", [0, 1]), Variable("y", [STAR, "a", "b"])


def test_values(variables):
    x, y = variables
    state = ChainState({x: 1, y: 0})
    assert state[x] == 1
    assert state.value(x) == Regular(1)
    assert state.value(y) is STAR
    assert len(state) == 2
    assert list(state) == [x, y]


def test_assign_updates_a_block(variables):
    x, y = variables
    state = ChainState({x: 0, y: 0})
    state.assign({x: 1, y: 2})
    assert state.snapshot() == {x: 1, y: 2}
    state[y] = 1
    assert state.value(y) == Regular("a")


def test_invalid_updates_leave_state_untouched(variables):
    x, y = variables
    state = ChainState({x: 0, y: 0})
    with pytest.raises(IndexError):
        state.assign({x: 1, y: 3})
    assert state.snapshot() == {x: 0, y: 0}
    with pytest.raises(KeyError):
        state[Variable("z", [0])] = 0
    with pytest.raises(TypeError):
        del state[x]
    with pytest.raises(IndexError):
        ChainState({x: 2})


def test_snapshot_is_independent(variables):
    x, y = variables
    state = ChainState({x: 0, y: 1})
    snapshot = state.snapshot()
    state[x] = 1
    assert snapshot[x] == 0


def test_from_assignment_requires_every_variable(variables):
    x, y = variables
    state = ChainState.from_assignment([x], {x: 1, y: 0})
    assert list(state) == [x]
    with pytest.raises(ValueError):
        ChainState.from_assignment([x, y], {x: 1})
