import logging
import threading
import time
from typing import Callable, List, Optional

from productcatalog.core.models import Product

logger = logging.getLogger(__name__)

DEFAULT_REVALIDATE_SECONDS = 60


class ListingCache:
    """
    Cached product listing.

    Reloaded on the first ``get`` after ``invalidate`` or once ``ttl_seconds``
    have passed since the last load.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_REVALIDATE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._products: Optional[List[Product]] = None
        self._loaded_at = 0.0

    @property
    def is_stale(self) -> bool:
        if self._products is None:
            return True
        return self._clock() - self._loaded_at >= self.ttl_seconds

    def get(self, loader: Callable[[], List[Product]]) -> List[Product]:
        with self._lock:
            if not self.is_stale:
                return list(self._products or [])
            products = loader()
            self._products = list(products)
            self._loaded_at = self._clock()
            logger.debug("Product listing reloaded (%d products)", len(self._products))
            return list(self._products)

    def invalidate(self) -> None:
        with self._lock:
            self._products = None
