# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import random
from enum import Enum
from typing import Any, List

import numpy.random
import torch
from blockgibbs.model.factor_graph import FactorGraph
from blockgibbs.model.variable import Variable


# Detect and report if a user fails to meet the inference contract.
def _verify_targets(targets: List[Variable], graph: FactorGraph) -> None:
    if not isinstance(targets, list):
        t = type(targets).__name__
        raise TypeError(
            f"Parameter 'targets' is required to be a list but is of type {t}."
        )

    for target in targets:
        if not isinstance(target, Variable):
            t = type(target).__name__
            raise TypeError(
                f"A target is required to be a Variable but is of type {t}."
            )
        if target not in graph:
            raise ValueError(f"Target {target} is not a variable of the factor graph.")


def _verify_graph(graph: Any) -> None:
    if not isinstance(graph, FactorGraph):
        t = type(graph).__name__
        raise TypeError(
            f"Parameter 'graph' is required to be a FactorGraph but is of type {t}."
        )


def _verify_count(name: str, value: Any, minimum: int) -> None:
    # bool is an int subclass but is never a meaningful count
    if not isinstance(value, int) or isinstance(value, bool):
        t = type(value).__name__
        raise TypeError(f"Parameter '{name}' is required to be an int but is of type {t}.")
    if value < minimum:
        raise ValueError(
            f"Parameter '{name}' must be at least {minimum} but is {value}."
        )


class VerboseLevel(Enum):
    """
    Enum class which is used to set how much output is printed during inference.
    LOAD_BAR enables tqdm for full inference loop.
    """

    OFF = 0
    LOAD_BAR = 1


def seed(seed: int) -> None:
    torch.manual_seed(seed)
    random.seed(seed)
    numpy.random.seed(seed)
