"""Status service package.

Provides order and payment status lookup and display helpers.
"""

from recyclehub.services.status.service import StatusService


__all__ = ["StatusService"]
