"""
Custom exceptions for the dexviz.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in dexviz.io.
- Keep dexviz.core as the source of truth for selection/lookup errors (see dexviz.core.errors).

Boundaries
- dexviz.io raises Io* errors for loading and configuration concerns:
  - IoConfigError: invalid or unsupported configuration.
  - IoSchemaError: a CSV/frame failed validation against dexviz.core.tables descriptors.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in dexviz.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from dexviz.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when configuration is invalid or unsupported.

    Examples:
        - Non-positive chart radius
        - Default stat that is not a StatKey
    """


class IoSchemaError(IoError):
    """
    Raised when a frame fails validation against the creatures descriptor.

    Notes:
        Scalar columns are safely cast first; the error is raised only when required
        columns are missing or cast values come out null.
    """
