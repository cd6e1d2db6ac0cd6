"""Clients for the chain node and the routing API."""
