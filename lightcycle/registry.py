"""
Registry of the resources tracked by a ring.
"""

import logging
from typing import Any, Dict, List, Optional

log = logging.getLogger(__name__)


class ResourceRegistry:
    """Owns the mapping from resource identifier to resource."""

    def __init__(self):
        self._resources: Dict[str, Any] = {}

    def register(self, identifier: str, resource: Any) -> bool:
        """
        Store a resource under its identifier.

        Returns:
            False if the identifier was already registered (the existing
            resource is kept), True otherwise
        """
        if identifier in self._resources:
            return False
        self._resources[identifier] = resource
        log.debug("registered resource=%s", identifier)
        return True

    def unregister(self, identifier: str) -> Optional[Any]:
        """Drop a resource and hand it back, or None if it was not registered."""
        resource = self._resources.pop(identifier, None)
        if resource is not None:
            log.debug("unregistered resource=%s", identifier)
        return resource

    def get(self, identifier: str) -> Optional[Any]:
        return self._resources.get(identifier)

    def identifiers(self) -> List[str]:
        """Snapshot of the registered identifiers, in registration order."""
        return list(self._resources)

    def values(self) -> List[Any]:
        return list(self._resources.values())

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._resources

    def __len__(self) -> int:
        return len(self._resources)
