"""Filter kinds the calculator knows how to size."""
from enum import Enum


class FilterKind(Enum):
    BLOOM = "bloom"
    CUCKOO = "cuckoo"

    @property
    def label(self) -> str:
        """Display name, e.g. "Bloom filter"."""
        return f"{self.value.capitalize()} filter"
