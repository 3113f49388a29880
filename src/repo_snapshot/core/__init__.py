"""Scan engine: ignore rules, discovery, aggregation, tree and runner."""
