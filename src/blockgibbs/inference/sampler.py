# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
import threading
from types import TracebackType
from typing import (
    Any,
    Dict,
    Generator,
    List,
    NamedTuple,
    NoReturn,
    Optional,
    Sequence,
    Type,
)

from blockgibbs.inference.block_sampler import BaseBlockSampler
from blockgibbs.model.utils import LogLevel
from blockgibbs.model.variable import Variable
from blockgibbs.state import ChainState


LOGGER = logging.getLogger("blockgibbs.inference")


class Sample(NamedTuple):
    """
    The output of one iteration. ``values`` maps every target with a regular
    value to that value; ``valid`` is true only if no target was irregular.
    """

    valid: bool
    values: Dict[Variable, Any]


class GibbsSampler(Generator[Sample, None, None]):
    """
    Drives a blocked Gibbs Markov chain. Each iteration sweeps every block
    sampler over the chain state and reports the values of the targets.

    Burn-in runs once, before the first sample is produced (``Gibbs.sampler``
    runs it when creating the sampler). Later iterations first run
    ``interval - 1`` thinning sweeps, so consecutive samples are ``interval``
    sweeps apart. The thinning sweeps are skipped before the first sample, so
    ``n`` burn-in sweeps and ``m`` samples take ``n + (m - 1) * interval + 1``
    sweeps in total.

    The sampler can be stopped from another thread with ``stop``; the chain is
    left in a consistent state since a sweep is never interrupted.

    Args:
        block_samplers: One sampler per block; blocks must be disjoint.
        state: The chain state, already initialized to a feasible assignment.
        targets: The variables reported in each sample.
        interval: Sweeps between two samples, 1 for no thinning.
        num_samples: Number of samples to produce, None for an anytime sampler.
    """

    def __init__(
        self,
        block_samplers: Sequence[BaseBlockSampler],
        state: ChainState,
        targets: Sequence[Variable],
        interval: int = 1,
        num_samples: Optional[int] = None,
    ):
        self.block_samplers: List[BaseBlockSampler] = list(block_samplers)
        self.state = state
        self.targets: List[Variable] = list(targets)
        self.interval = interval
        self.num_sweeps = 0
        self._num_samples_remaining = (
            float("inf") if num_samples is None else num_samples
        )
        self._is_first_iteration = True
        self._stop_requested = threading.Event()

    def sweep(self) -> None:
        """Resamples every block once."""
        for block_sampler in self.block_samplers:
            block_sampler.sample(self.state)
        self.num_sweeps += 1
        LOGGER.log(
            LogLevel.DEBUG_SWEEP.value,
            f"Sweep {self.num_sweeps}: {self.state}",
        )

    def _run_sweeps(self, num_sweeps: int) -> None:
        for _ in range(num_sweeps):
            if self.stopped:
                return
            self.sweep()

    def run_burn_in(self, num_sweeps: int) -> None:
        """Advances the chain by ``num_sweeps`` discarded sweeps."""
        self._run_sweeps(num_sweeps)

    def run_thinning(self, interval: int) -> None:
        """Runs the ``interval - 1`` sweeps separating two samples."""
        self._run_sweeps(interval - 1)

    def produce_sample(self) -> Sample:
        """Reads the targets from the current state."""
        values = {}
        for target in self.targets:
            extended = self.state.value(target)
            # irregular values are left out and invalidate the sample
            if extended.is_regular:
                values[target] = extended.value
        return Sample(len(values) == len(self.targets), values)

    def iterate(self) -> Sample:
        """Performs one full iteration and returns its sample."""
        if not self._is_first_iteration:
            self.run_thinning(self.interval)
        self._is_first_iteration = False
        self._run_sweeps(1)
        sample = self.produce_sample()
        if not sample.valid:
            LOGGER.log(
                LogLevel.DEBUG_SWEEP.value,
                f"Invalid sample after sweep {self.num_sweeps}: "
                f"{len(self.targets) - len(sample.values)} irregular targets.",
            )
        return sample

    def stop(self) -> None:
        """Asks the sampler to stop at the next sweep boundary. Safe to call
        from another thread."""
        self._stop_requested.set()

    @property
    def stopped(self) -> bool:
        return self._stop_requested.is_set()

    def send(self, value: None = None) -> Sample:
        if self._num_samples_remaining <= 0 or self.stopped:
            raise StopIteration
        sample = self.iterate()
        if self.stopped:
            # the iteration was interrupted, so its sample is not reported
            raise StopIteration
        # update the counter last, so that an exception during a sweep does not
        # consume a sample
        self._num_samples_remaining -= 1
        return sample

    def throw(
        self,
        typ: Type[BaseException],
        val: Optional[BaseException] = None,
        tb: Optional[TracebackType] = None,
    ) -> NoReturn:
        """Use the default error handling behavior (throw Exception as-is)"""
        super().throw(typ, val, tb)
