"""Composition root for the adjudication core.

build_adjudication_container() wires the services over their adapters;
the API layer reaches them only through the container, never through
the adapters directly.
"""
