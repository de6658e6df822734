"""Test utilities for the blog::

    from inkwell.testing import TestClient
"""

from inkwell.testing.client import TestClient, form_body

__all__ = ["TestClient", "form_body"]
