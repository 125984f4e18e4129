# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Partitions the variables of a factor graph into blocks that are resampled
jointly. A block holds a stochastic root together with every variable that is,
directly or transitively, a deterministic function of it.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Sequence, Set

from blockgibbs.model.utils import LogLevel
from blockgibbs.model.variable import (
    Apply,
    Chain,
    InternalChain,
    Stochastic,
    Variable,
    VariableKind,
)


LOGGER = logging.getLogger("blockgibbs.inference")

Block = List[Variable]


def deterministic_parents(kind: Optional[VariableKind]) -> Set[Variable]:
    """
    The variables whose blocks a variable of the given kind should join.

    * ``Apply``: the arguments of the function.
    * ``Chain``: the result variables of every branch.
    * ``InternalChain``: the branch results and the branch parent.
    * ``Stochastic``, ``None`` and anything unrecognized: no parents, so the
      variable seeds a block of its own.
    """
    if isinstance(kind, Stochastic):
        return set()
    if isinstance(kind, Apply):
        return set(kind.args)
    if isinstance(kind, Chain):
        return set(kind.results)
    if isinstance(kind, InternalChain):
        return set(kind.results) | {kind.parent}
    return set()


def _expand_block(
    seed: Variable, children: Mapping[Variable, Set[Variable]]
) -> Set[Variable]:
    # reflexive-transitive closure over the child relation
    block: Set[Variable] = set()
    frontier = {seed}
    while frontier:
        block |= frontier
        frontier = set().union(*(children[v] for v in frontier)) - block
    return block


def create_blocks(
    variables: Sequence[Variable],
    kinds: Mapping[Variable, VariableKind],
) -> List[Block]:
    """
    Partitions ``variables`` into blocks, each made of a parentless variable
    and the closure of its deterministic descendants.

    Closures that share a variable (a deterministic variable reached from two
    roots) are merged into a single block, and variables reached from no root
    (deterministic cycles) are closed over from themselves, so the result always
    covers every variable exactly once. Blocks and their contents are ordered
    like ``variables``.

    Args:
        variables: Every variable of the graph.
        kinds: The kind of each variable; missing entries count as stochastic.

    Returns:
        A list of disjoint, non-empty blocks whose union is ``variables``.
    """
    variables = list(dict.fromkeys(variables))
    position = {v: i for i, v in enumerate(variables)}

    # Maps each variable to its deterministic parents, restricted to the graph
    parents: Dict[Variable, Set[Variable]] = {}
    for var in variables:
        kind = kinds.get(var)
        if not isinstance(kind, (Stochastic, Apply, Chain, InternalChain)):
            LOGGER.log(
                LogLevel.DEBUG_BLOCKS.value,
                f"Unrecognized kind {kind!r} for {var}; sampling it on its own.",
            )
        parents[var] = {p for p in deterministic_parents(kind) if p in position}

    # Maps each variable to its deterministic children
    children: Dict[Variable, Set[Variable]] = defaultdict(set)
    for var, var_parents in parents.items():
        for parent in var_parents:
            children[parent].add(var)

    closures = [_expand_block(v, children) for v in variables if not parents[v]]
    covered = set().union(*closures)
    for var in variables:
        if var not in covered:
            closure = _expand_block(var, children)
            covered |= closure
            closures.append(closure)

    # merge closures that overlap, keeping the first-discovered one as the owner
    owner: Dict[Variable, int] = {}
    merged: List[Set[Variable]] = []
    for closure in closures:
        targets = sorted({owner[v] for v in closure if v in owner})
        if not targets:
            merged.append(set(closure))
            index = len(merged) - 1
        else:
            index = targets[0]
            for other in targets[1:]:
                merged[index] |= merged[other]
                merged[other] = set()
            merged[index] |= closure
        for v in merged[index]:
            owner[v] = index

    blocks = [
        sorted(block, key=position.__getitem__) for block in merged if len(block) > 0
    ]
    blocks.sort(key=lambda block: position[block[0]])
    LOGGER.log(
        LogLevel.DEBUG_BLOCKS.value,
        f"Partitioned {len(variables)} variables into {len(blocks)} blocks: "
        + "; ".join("{" + ", ".join(str(v) for v in b) + "}" for b in blocks),
    )
    return blocks
