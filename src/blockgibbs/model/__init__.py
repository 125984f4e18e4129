# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from blockgibbs.model.extended import extend, Extended, Regular, STAR, Star
from blockgibbs.model.factor import Factor
from blockgibbs.model.factor_graph import FactorGraph, FactorGraphBuilder
from blockgibbs.model.utils import get_blockgibbs_logger, LogLevel
from blockgibbs.model.variable import (
    Apply,
    Chain,
    InternalChain,
    Stochastic,
    Variable,
    VariableKind,
)


__all__ = [
    "Apply",
    "Chain",
    "Extended",
    "Factor",
    "FactorGraph",
    "FactorGraphBuilder",
    "InternalChain",
    "LogLevel",
    "Regular",
    "STAR",
    "Star",
    "Stochastic",
    "Variable",
    "VariableKind",
    "extend",
    "get_blockgibbs_logger",
]
