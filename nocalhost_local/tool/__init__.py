"""Command line tool for nocalhost-local."""
