"""Prefix routing."""

from inkwell.routing.route import Route, RouteMatch
from inkwell.routing.router import Router, extract_prefix

__all__ = ["Route", "RouteMatch", "Router", "extract_prefix"]
