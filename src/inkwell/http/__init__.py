"""HTTP primitives: request, response, headers and form data."""
