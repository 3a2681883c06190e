"""Catalog services: schema bootstrap, row store, partition catalog."""
