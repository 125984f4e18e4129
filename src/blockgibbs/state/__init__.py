# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from blockgibbs.state.chain_state import ChainState
from blockgibbs.state.initialize_fn import (
    InitializationError,
    InitializeFn,
    walk_sat,
)


__all__ = [
    "ChainState",
    "InitializationError",
    "InitializeFn",
    "walk_sat",
]
