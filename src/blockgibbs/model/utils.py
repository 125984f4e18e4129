# Copyright (c) Meta Platforms, Inc. and affiliates.
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

import logging
from enum import Enum


class LogLevel(Enum):
    """
    Logging levels used by the package. The debug levels sit between
    ``logging.DEBUG`` and ``logging.INFO`` and get finer as they go down:

    * ``DEBUG_SWEEP``: the chain state after every sweep and invalid samples.
    * ``DEBUG_SAMPLER``: initializer progress and blocks left unchanged
      because no candidate had non-zero weight.
    * ``DEBUG_BLOCKS``: the partition into blocks and variables of an
      unrecognized kind.
    """

    ERROR = 40
    WARNING = 30
    INFO = 20
    DEBUG_SWEEP = 16
    DEBUG_SAMPLER = 14
    DEBUG_BLOCKS = 12


def get_blockgibbs_logger(
    console_level: LogLevel = LogLevel.WARNING, file_level: LogLevel = LogLevel.INFO
) -> logging.Logger:
    """
    Configures the ``blockgibbs`` logger that every module logger
    (``blockgibbs.inference``, ``blockgibbs.state``, ...) propagates to.
    Messages go to the console and to ``blockgibbs.log`` in the working
    directory, each filtered by its own level. Pass ``LogLevel.DEBUG_SWEEP`` as
    ``file_level`` to trace a run sweep by sweep.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level.value)
    file_handler = logging.FileHandler("blockgibbs.log")
    file_handler.setLevel(file_level.value)

    logger = logging.getLogger("blockgibbs")
    logger.setLevel(min(file_level.value, console_level.value))
    # calling again replaces the handlers instead of duplicating output
    logger.handlers.clear()
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)
    return logger
