# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Iterator, List, Mapping, Union

import torch
from blockgibbs.inference.sampler import Sample
from blockgibbs.model.variable import Variable


class GibbsSamples(Mapping[Variable, List[Any]]):
    """
    Represents a view of the samples returned by ``Gibbs.infer``.

    Only valid samples contribute to the statistics; invalid ones (with an
    irregular target) are counted but otherwise ignored. If no chain is
    specified, the data across all chains is accessible.

    Args:
        chain_results: For each chain, the samples in the order they were drawn.
        targets: The variables that were reported.
    """

    def __init__(self, chain_results: List[List[Sample]], targets: List[Variable]):
        self.chain_results = chain_results
        self.targets = targets
        self.single_chain_view = False

    @property
    def num_chains(self) -> int:
        return len(self.chain_results)

    @property
    def num_samples(self) -> int:
        return sum(len(chain) for chain in self.chain_results)

    @property
    def valid_samples(self) -> List[Sample]:
        return [s for chain in self.chain_results for s in chain if s.valid]

    @property
    def num_valid(self) -> int:
        return len(self.valid_samples)

    @property
    def num_invalid(self) -> int:
        return self.num_samples - self.num_valid

    def get_chain(self, chain: int = 0) -> GibbsSamples:
        """
        Return a GibbsSamples with restricted view to a specified chain

        :param chain: specific chain to view.
        :returns: view of the data restricted to specified chain
        """
        if self.single_chain_view:
            raise ValueError(
                "The current GibbsSamples object has already been"
                " restricted to a single chain"
            )
        elif chain < 0 or chain >= self.num_chains:
            raise IndexError("Please specify a valid chain")
        view = GibbsSamples([self.chain_results[chain]], self.targets)
        view.single_chain_view = True
        return view

    def _check_target(self, target: Variable) -> None:
        if target not in self.targets:
            raise KeyError(f"{target} is not a target of this inference.")

    def get_values(self, target: Variable) -> List[Any]:
        """The value of ``target`` in every valid sample, in order."""
        self._check_target(target)
        return [s.values[target] for s in self.valid_samples]

    def __getitem__(self, target: Variable) -> List[Any]:
        return self.get_values(target)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self.targets)

    def __len__(self) -> int:
        return len(self.targets)

    def distribution(self, target: Variable) -> Dict[Any, float]:
        """The empirical distribution of ``target`` over the valid samples."""
        values = self.get_values(target)
        if len(values) == 0:
            raise ValueError("There are no valid samples to estimate from.")
        counts = Counter(values)
        return {value: count / len(values) for value, count in counts.items()}

    def probability(
        self, target: Variable, predicate: Union[Callable[[Any], bool], Any]
    ) -> float:
        """The fraction of valid samples in which ``target`` satisfies
        ``predicate``, or equals it when ``predicate`` is not callable."""
        check = predicate if callable(predicate) else (lambda v: v == predicate)
        return sum(
            prob for value, prob in self.distribution(target).items() if check(value)
        )

    def expectation(self, target: Variable, fn: Callable[[Any], float]) -> float:
        return sum(
            prob * float(fn(value))
            for value, prob in self.distribution(target).items()
        )

    def to_tensor(self, target: Variable) -> torch.Tensor:
        """The valid values of a numeric ``target`` as a 1-D tensor."""
        return torch.tensor(self.get_values(target))

    def __str__(self) -> str:
        return (
            f"GibbsSamples({self.num_chains} chains, {self.num_valid} valid and "
            f"{self.num_invalid} invalid samples)"
        )
