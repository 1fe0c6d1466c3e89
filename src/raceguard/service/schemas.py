"""Pydantic response models for the HTTP service."""

from typing import List, Literal

from pydantic import BaseModel, Field


class IssueSchema(BaseModel):
    """One finding in the serialized report."""

    filename: str = Field(description="Name of the analyzed file")
    kind: str = Field(description="Short rule label, e.g. 'NOLOCK hint'")
    problem: str = Field(description="What the rule detected")
    suggestion: str = Field(description="How to remediate it")
    severity: Literal["low", "medium", "high"] = Field(description="Fixed per-rule severity")


class SeverityTotalsSchema(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0


class ReportSchema(BaseModel):
    """Aggregate result of one analysis run."""

    issues: List[IssueSchema] = Field(default_factory=list)
    summary: str
    suggestions: List[str] = Field(default_factory=list)
    severityTotals: SeverityTotalsSchema = Field(default_factory=SeverityTotalsSchema)
    scannedFiles: int = 0


class HealthSchema(BaseModel):
    status: str
    version: str
