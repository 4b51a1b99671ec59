# SPDX-License-Identifier: Apache-2.0

"""
Middleware package for request processing.

This package contains the error handler, the edit lock guard and request
body helpers used by the portal routes.
"""
