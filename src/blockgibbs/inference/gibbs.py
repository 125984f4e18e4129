# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import copy
import logging
from functools import partial
from typing import List, Optional, Sequence

from blockgibbs.inference.block_sampler import (
    BaseBlockSampler,
    BlockSamplerFactory,
    default_block_sampler,
)
from blockgibbs.inference.blocking import Block, create_blocks
from blockgibbs.inference.dependent import DependentModel, make_dependent_factor
from blockgibbs.inference.monte_carlo_samples import GibbsSamples
from blockgibbs.inference.sampler import GibbsSampler, Sample
from blockgibbs.inference.utils import (
    _verify_count,
    _verify_graph,
    _verify_targets,
    VerboseLevel,
)
from blockgibbs.model.factor import Factor
from blockgibbs.model.factor_graph import FactorGraph
from blockgibbs.model.utils import LogLevel
from blockgibbs.model.variable import Variable
from blockgibbs.state import ChainState, InitializeFn, walk_sat
from tqdm.auto import tqdm


LOGGER = logging.getLogger("blockgibbs.inference")


class Gibbs:
    """
    Blocked Gibbs sampling over a discrete factor graph. Variables that are
    deterministic functions of other variables are grouped with their
    stochastic drivers (see ``create_blocks``) and every block is resampled
    jointly by a block sampler once per sweep.

    Example::

        builder = FactorGraphBuilder()
        x = builder.flip("x", 0.3)
        y = builder.apply("y", [x], lambda x: x)
        samples = Gibbs(burn_in=100, interval=2).infer(builder.build(), [y], 1000)
        samples.probability(y, True)

    Args:
        burn_in: Number of sweeps discarded before the first sample.
        interval: Number of sweeps between two samples; 1 means no thinning.
        block_sampler_factory: Creates the sampler of a block from its
            ``BlockInfo``. Defaults to exact enumeration of the block.
        dependent_models: Auxiliary models whose evidence contributes extra
            factors over shared variables.
        initialize_fn: Finds the feasible assignment the chain starts from.
    """

    def __init__(
        self,
        burn_in: int = 0,
        interval: int = 1,
        block_sampler_factory: BlockSamplerFactory = default_block_sampler,
        dependent_models: Sequence[DependentModel] = (),
        initialize_fn: InitializeFn = walk_sat,
    ):
        _verify_count("burn_in", burn_in, 0)
        _verify_count("interval", interval, 1)
        if not callable(block_sampler_factory):
            t = type(block_sampler_factory).__name__
            raise TypeError(
                "Parameter 'block_sampler_factory' is required to be callable "
                f"but is of type {t}."
            )
        for model in dependent_models:
            if not isinstance(model, DependentModel):
                t = type(model).__name__
                raise TypeError(
                    f"A dependent model is required to be a DependentModel but is "
                    f"of type {t}."
                )
        self.burn_in = burn_in
        self.interval = interval
        self.block_sampler_factory = block_sampler_factory
        self.dependent_models = list(dependent_models)
        self.initialize_fn = initialize_fn

    def get_factors(self, graph: FactorGraph) -> List[Factor]:
        """The factors of the graph, preceded by those of the dependent models."""
        dependent_factors = [make_dependent_factor(m) for m in self.dependent_models]
        return dependent_factors + list(graph.factors)

    def create_blocks(self, graph: FactorGraph) -> List[Block]:
        return create_blocks(graph.variables, graph.kinds)

    def get_block_samplers(
        self, blocks: List[Block], factors: List[Factor]
    ) -> List[BaseBlockSampler]:
        block_samplers = []
        for block in blocks:
            members = set(block)
            relevant = [f for f in factors if any(v in members for v in f.variables)]
            block_samplers.append(self.block_sampler_factory((block, relevant)))
        return block_samplers

    def sampler(
        self,
        graph: FactorGraph,
        targets: List[Variable],
        num_samples: Optional[int] = None,
    ) -> GibbsSampler:
        """
        Returns a generator that produces a new ``Sample`` each time it is
        iterated. The chain is initialized and burnt in before this method
        returns. If ``num_samples`` is not provided the generator is infinite
        (an anytime sampler) and can be ended with ``GibbsSampler.stop``.

        Args:
            graph: The factor graph to sample from.
            targets: Variables to report in each sample.
            num_samples: Number of samples, defaults to None for an infinite sampler.

        Raises:
            InitializationError: if no feasible initial assignment is found.
        """
        _verify_graph(graph)
        _verify_targets(targets, graph)
        if num_samples is not None:
            _verify_count("num_samples", num_samples, 0)

        factors = self.get_factors(graph)
        # dependent models may mention variables the graph does not have
        variables = list(graph.variables)
        variables += [v for f in factors for v in f.variables]
        variables = list(dict.fromkeys(variables))
        blocks = self.create_blocks(
            FactorGraph(tuple(variables), tuple(factors), graph.kinds)
        )
        block_samplers = self.get_block_samplers(blocks, factors)

        # start from a feasible state, then take the burn-in sweeps
        initial_assignment = self.initialize_fn(factors, variables)
        state = ChainState.from_assignment(variables, initial_assignment)
        sampler = GibbsSampler(
            block_samplers, state, targets, self.interval, num_samples
        )
        LOGGER.log(
            LogLevel.INFO.value,
            f"Gibbs sampling {len(variables)} variables in {len(blocks)} blocks "
            f"with {len(factors)} factors; burning in for {self.burn_in} sweeps.",
        )
        sampler.run_burn_in(self.burn_in)
        return sampler

    def _single_chain_infer(
        self,
        graph: FactorGraph,
        targets: List[Variable],
        num_samples: int,
        verbose: VerboseLevel,
        chain_id: int,
    ) -> List[Sample]:
        # start inference with a copy of self to ensure that every chain starts
        # from the same pristine state
        kernel = copy.deepcopy(self)
        sampler = kernel.sampler(graph, targets, num_samples)
        return list(
            tqdm(
                sampler,
                total=num_samples,
                desc="Samples collected",
                disable=verbose == VerboseLevel.OFF,
                position=chain_id,
            )
        )

    def infer(
        self,
        graph: FactorGraph,
        targets: List[Variable],
        num_samples: int,
        num_chains: int = 1,
        verbose: VerboseLevel = VerboseLevel.LOAD_BAR,
    ) -> GibbsSamples:
        """
        Runs ``num_chains`` independent chains for ``num_samples`` iterations
        each and returns a ``GibbsSamples`` object holding every sample.

        Args:
            graph: The factor graph to sample from.
            targets: Variables to report in each sample.
            num_samples: Number of samples per chain.
            num_chains: Number of chains to run, defaults to 1.
            verbose: Whether to display the progress bar or not.
        """
        _verify_graph(graph)
        _verify_targets(targets, graph)
        _verify_count("num_samples", num_samples, 0)
        _verify_count("num_chains", num_chains, 1)

        single_chain_infer = partial(
            self._single_chain_infer, graph, targets, num_samples, verbose
        )
        chain_results = list(map(single_chain_infer, range(num_chains)))
        samples = GibbsSamples(chain_results, targets)
        if samples.num_invalid > 0:
            LOGGER.log(
                LogLevel.INFO.value,
                f"{samples.num_invalid} of {samples.num_samples} samples had "
                "irregular targets and were discarded.",
            )
        return samples
