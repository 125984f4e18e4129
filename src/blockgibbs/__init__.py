# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from .inference import (
    BaseBlockSampler,
    DependentModel,
    Gibbs,
    GibbsSampler,
    GibbsSamples,
    Sample,
    seed,
    SimpleBlockSampler,
    VerboseLevel,
)
from .model import (
    Apply,
    Chain,
    Factor,
    FactorGraph,
    FactorGraphBuilder,
    get_blockgibbs_logger,
    InternalChain,
    Regular,
    STAR,
    Stochastic,
    Variable,
)
from .state import ChainState, InitializationError, walk_sat


__version__ = "0.1.0"

LOGGER = get_blockgibbs_logger()

__all__ = [
    "Apply",
    "BaseBlockSampler",
    "Chain",
    "ChainState",
    "DependentModel",
    "Factor",
    "FactorGraph",
    "FactorGraphBuilder",
    "Gibbs",
    "GibbsSampler",
    "GibbsSamples",
    "InitializationError",
    "InternalChain",
    "Regular",
    "STAR",
    "Sample",
    "SimpleBlockSampler",
    "Stochastic",
    "Variable",
    "VerboseLevel",
    "seed",
    "walk_sat",
]
