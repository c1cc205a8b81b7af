#!/usr/bin/env python3
# shellkit/plugins/kv/__init__.py
"""Key/value store commands over a dict session payload."""
