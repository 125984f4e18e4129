# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from typing import List, Sequence, Tuple

import torch
from blockgibbs.inference.block_sampler.base_block_sampler import (
    BaseBlockSampler,
    BlockInfo,
)
from blockgibbs.model.factor import Factor
from blockgibbs.model.utils import LogLevel
from blockgibbs.model.variable import Variable
from blockgibbs.state import ChainState


LOGGER = logging.getLogger("blockgibbs.block_sampler")


class SimpleBlockSampler(BaseBlockSampler):
    """
    Exact blocked Gibbs update. Every joint assignment of the block is weighted
    by the product of the block's factors, with variables outside of the block
    fixed at their current values, and one assignment is drawn in proportion to
    its weight.

    The number of candidates is the product of the block's domain sizes, so this
    sampler suits blocks made of a few small variables, which is what
    deterministic blocking produces.
    """

    def __init__(self, block: Sequence[Variable], factors: Sequence[Factor]):
        super().__init__(block, factors)
        sizes = [v.size for v in self.block]
        # one row per joint assignment of the block, one column per variable
        self._candidates = torch.cartesian_prod(
            *(torch.arange(size) for size in sizes)
        ).reshape(-1, len(sizes))
        column = {v: i for i, v in enumerate(self.block)}
        # for every factor, the column feeding each of its axes (None if the
        # variable lives outside of the block)
        self._axes: List[Tuple[Factor, Tuple]] = [
            (f, tuple(column.get(v) for v in f.variables)) for f in self.factors
        ]

    @property
    def num_candidates(self) -> int:
        return self._candidates.shape[0]

    def weights(self, state: ChainState) -> torch.Tensor:
        """Unnormalized weight of every candidate assignment under ``state``."""
        num = self.num_candidates
        weights = torch.ones(num, dtype=torch.double)
        for factor, columns in self._axes:
            index = tuple(
                self._candidates[:, col]
                if col is not None
                else torch.full((num,), state[var], dtype=torch.long)
                for var, col in zip(factor.variables, columns)
            )
            weights *= factor.values[index]
        return weights

    def sample(self, state: ChainState) -> None:
        weights = self.weights(state)
        if not torch.any(weights > 0):
            LOGGER.log(
                LogLevel.DEBUG_SAMPLER.value,
                f"{self} has no candidate with non-zero weight; keeping its values.",
            )
            return
        choice = torch.multinomial(weights, 1).item()
        row = self._candidates[choice]
        state.assign({v: int(row[i]) for i, v in enumerate(self.block)})


def default_block_sampler(block_info: BlockInfo) -> BaseBlockSampler:
    return SimpleBlockSampler.from_block_info(block_info)
