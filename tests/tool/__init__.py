"""Tests for nocalhost-local tools."""
