from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

if TYPE_CHECKING:
    from restmodel.core.builder import Builder


class Paginate(ABC):
    """
    Mixin for models whose API supports pagination.

    ``set_pagination`` translates the requested page into query parameters,
    ``get_total`` reads the total number of records, usually from the last
    response of the builder.
    """

    @abstractmethod
    def set_pagination(self, builder: Builder, per_page: int, current_page: int) -> None:
        pass

    @abstractmethod
    def get_total(self, builder: Builder) -> Optional[int]:
        pass


@dataclass
class PaginationResult:
    items: List[Any] = field(default_factory=list)
    total: int = 0
    per_page: int = 15
    current_page: int = 1

    @property
    def last_page(self) -> int:
        if not self.per_page:
            return 1
        return max(int(math.ceil(self.total / self.per_page)), 1)

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": [
                item.to_dict() if hasattr(item, "to_dict") else item
                for item in self.items
            ],
            "total": self.total,
            "per_page": self.per_page,
            "current_page": self.current_page,
            "last_page": self.last_page,
        }
