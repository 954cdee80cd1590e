from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import College


class ICollegeRepository(ABC):
    """College repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, college_id: UUID) -> Optional[College]:
        """Get college by ID"""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[College]:
        """Get college by its unique code"""
        pass

    @abstractmethod
    async def list_active(self) -> List[College]:
        """All active colleges ordered by name"""
        pass

    @abstractmethod
    async def create(self, college: College) -> College:
        """Create a new college"""
        pass
