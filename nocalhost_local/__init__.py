"""
nocalhost-local lets you work on the workloads of applications deployed to a
kubernetes cluster with nhctl: browse their state, enter and exit development
mode, and view or edit their configuration.
"""

__all__ = [
    "identity",
    "store",
    "lock",
    "commands",
    "resolver",
    "document",
    "extension",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
