"""Shared helpers: logging, YAML configs, device and tensor coercion."""
