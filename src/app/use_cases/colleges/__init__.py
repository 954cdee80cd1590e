"""
College Use Cases

Tenant management needed by the authentication core.
"""

from .create_college_use_case import CreateCollegeUseCase
from .get_college_use_case import GetCollegeUseCase
from .list_colleges_use_case import ListCollegesUseCase
from .dtos import CreateCollegeCommand, CollegeInfo, CollegeListItem, CollegeListResponse

__all__ = [
    "CreateCollegeUseCase",
    "GetCollegeUseCase",
    "ListCollegesUseCase",
    "CreateCollegeCommand",
    "CollegeInfo",
    "CollegeListItem",
    "CollegeListResponse",
]
