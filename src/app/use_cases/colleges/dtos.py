"""
College Use Case DTOs
"""

from typing import List

from pydantic import BaseModel

from src.domain.entities import College


class CreateCollegeCommand(BaseModel):
    """Validated intent to create a college"""

    name: str
    code: str


class CollegeInfo(BaseModel):
    """College as returned to clients"""

    id: str
    name: str
    code: str
    is_active: bool

    @classmethod
    def from_college(cls, college: College) -> "CollegeInfo":
        return cls(
            id=str(college.id),
            name=college.name,
            code=college.code,
            is_active=college.is_active,
        )


class CollegeListItem(CollegeInfo):
    """College in the public listing, flagged when it is the caller's own"""

    is_member: bool = False


class CollegeListResponse(BaseModel):
    colleges: List[CollegeListItem]
