"""Data models for YC Scout."""

from ycscout.models.company import CompanyList, CompanyRecord, ScoutResult

__all__ = ["CompanyList", "CompanyRecord", "ScoutResult"]
