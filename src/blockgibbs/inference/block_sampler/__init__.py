# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from blockgibbs.inference.block_sampler.base_block_sampler import (
    BaseBlockSampler,
    BlockInfo,
    BlockSamplerFactory,
)
from blockgibbs.inference.block_sampler.simple_block_sampler import (
    default_block_sampler,
    SimpleBlockSampler,
)


__all__ = [
    "BaseBlockSampler",
    "BlockInfo",
    "BlockSamplerFactory",
    "SimpleBlockSampler",
    "default_block_sampler",
]
