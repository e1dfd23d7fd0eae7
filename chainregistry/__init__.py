"""Configuration types, registry paths, genesis allocation diffs and a scripted JSON-RPC mock for a rollup chain registry."""

__version__ = "0.1.0"