"""Process invocation: policies, results and the run_cmd seam."""

from devstack.process.policy import ProcessPolicy, ProcessResult
from devstack.process.runner import invoke, make_remove_file, make_run_cmd

__all__ = [
    "ProcessPolicy",
    "ProcessResult",
    "invoke",
    "make_remove_file",
    "make_run_cmd",
]
