from typing import Iterable, List

from pkgcompat.models.manifest import Manifest


class StaticResolver:
    """Read-only snapshot of already resolved manifests, in resolver order."""

    def __init__(self, manifests: Iterable[Manifest]):
        self._manifests = list(manifests)

    def get_manifests(self) -> List[Manifest]:
        return list(self._manifests)
