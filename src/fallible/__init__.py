"""fallible: a Result type with chainable combinators.

Public API:
    - Success / Failure / Result: the sum type and its variants
    - success() / failure(): construction helpers
    - combine(), combine_all(), match(), attempt(), ensure(), partition()
    - flat_map_async(), chain_async(), gather_results(): async composition
    - Pipeline: named, short-circuiting step runner
"""

from __future__ import annotations

import logging

from fallible.aio import (
    attempt_async,
    chain_async,
    flat_map_async,
    gather_results,
    map_async,
)
from fallible.combinators import (
    attempt,
    combine,
    combine_all,
    ensure,
    match,
    partition,
)
from fallible.config import Config, resolve_config
from fallible.errors import (
    ConfigurationError,
    FallibleError,
    InvariantViolationError,
    UnwrapError,
)
from fallible.pipeline import Pipeline, PipelineOutcome, Step
from fallible.result import Failure, Result, Success, failure, is_result, success

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("fallible-result")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("fallible").addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "ConfigurationError",
    "Failure",
    "FallibleError",
    "InvariantViolationError",
    "Pipeline",
    "PipelineOutcome",
    "Result",
    "Step",
    "Success",
    "UnwrapError",
    "attempt",
    "attempt_async",
    "chain_async",
    "combine",
    "combine_all",
    "ensure",
    "failure",
    "flat_map_async",
    "gather_results",
    "is_result",
    "map_async",
    "match",
    "partition",
    "resolve_config",
    "success",
]
