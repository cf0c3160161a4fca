"""SQLAlchemy ORM models."""

from cvecatalog.models.analysis import AnalysisData
from cvecatalog.models.base import Base
from cvecatalog.models.cve import CveData

__all__ = ["Base", "AnalysisData", "CveData"]
