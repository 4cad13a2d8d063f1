"""Buildless CLI."""
