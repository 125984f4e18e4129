# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from blockgibbs.inference.block_sampler import (
    BaseBlockSampler,
    BlockInfo,
    BlockSamplerFactory,
    default_block_sampler,
    SimpleBlockSampler,
)
from blockgibbs.inference.blocking import create_blocks, deterministic_parents
from blockgibbs.inference.dependent import DependentModel, make_dependent_factor
from blockgibbs.inference.gibbs import Gibbs
from blockgibbs.inference.monte_carlo_samples import GibbsSamples
from blockgibbs.inference.sampler import GibbsSampler, Sample
from blockgibbs.inference.utils import seed, VerboseLevel


__all__ = [
    "BaseBlockSampler",
    "BlockInfo",
    "BlockSamplerFactory",
    "DependentModel",
    "Gibbs",
    "GibbsSampler",
    "GibbsSamples",
    "Sample",
    "SimpleBlockSampler",
    "VerboseLevel",
    "create_blocks",
    "default_block_sampler",
    "deterministic_parents",
    "make_dependent_factor",
    "seed",
]
