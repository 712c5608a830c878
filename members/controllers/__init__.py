"""
Request controllers for the members site.

Controllers are plain functions that accept request data, the current
session, and the stores they need, and return a tuple of response data,
status code, and headers. They know nothing about Flask; the routes in
:mod:`members.routes.ui` render templates and set cookies.
"""
