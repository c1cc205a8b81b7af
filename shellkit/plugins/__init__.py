#!/usr/bin/env python3
# shellkit/plugins/__init__.py
"""Bundled command plugins for the demo shell."""
