# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from abc import ABCMeta, abstractmethod
from typing import Callable, List, Sequence, Tuple

from blockgibbs.model.factor import Factor
from blockgibbs.model.variable import Variable
from blockgibbs.state import ChainState


# Information passed to a block sampler factory: the block and every factor
# that mentions at least one of its variables.
BlockInfo = Tuple[List[Variable], List[Factor]]


class BaseBlockSampler(metaclass=ABCMeta):
    """
    Resamples the variables of one block jointly, conditioned on the current
    values of every other variable.

    Args:
        block: The variables this sampler owns.
        factors: The factors that mention at least one variable of the block.
    """

    def __init__(self, block: Sequence[Variable], factors: Sequence[Factor]):
        if len(block) == 0:
            raise ValueError("A block sampler requires a non-empty block.")
        self.block: List[Variable] = list(block)
        self.factors: List[Factor] = list(factors)

    @classmethod
    def from_block_info(cls, block_info: BlockInfo) -> "BaseBlockSampler":
        """Usable as a ``BlockSamplerFactory``."""
        block, factors = block_info
        return cls(block, factors)

    @abstractmethod
    def sample(self, state: ChainState) -> None:
        """Draws new values for the block and writes them into ``state``. Only
        the block's own entries may be modified."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(" + ", ".join(str(v) for v in self.block) + ")"
        )


BlockSamplerFactory = Callable[[BlockInfo], BaseBlockSampler]
