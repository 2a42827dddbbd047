"""Kernel value types – public re-export surface.

Modules:
  result.py – Ok, Err, Result, success, failure, merge_all
"""

from dataspace_policy.kernel.types.result import (
    Err,
    Ok,
    Result,
    failure,
    merge_all,
    success,
)

__all__ = ["Err", "Ok", "Result", "failure", "merge_all", "success"]
