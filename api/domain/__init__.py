# SPDX-License-Identifier: Apache-2.0

"""
Domain logic package for the safety operations portal.

This package contains pure business logic functions with no side effects.
All domain functions are testable without a database or a Flask app.
"""
