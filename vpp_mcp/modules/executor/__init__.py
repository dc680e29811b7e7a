"""
Executor Module - Black Box Interface

Purpose: Run kubectl (and through it vppctl/gobgp) as child processes
Interface: ProcessRunner.run() returning a CommandResult, PodExec for
           in-pod commands
Hidden: Subprocess handling, timeout enforcement, output decoding,
        kubectl argument layout

Can be replaced with a different execution mechanism (direct K8s exec API).
"""

from .pod import PodExec
from .runner import DEFAULT_TIMEOUT, ProcessRunner

__all__ = ["DEFAULT_TIMEOUT", "PodExec", "ProcessRunner"]
