"""Pydantic models and enums shared by the manifest loader, issues and reports."""

from enum import StrEnum

from pydantic import BaseModel, Field


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATIONAL = "informational"
    IGNORE = "ignore"


class Category(StrEnum):
    PRODUCTIVITY = "productivity"


# -----------------------------------------------------------------------
# Declaration manifest (input from non-Python hosts)
# -----------------------------------------------------------------------


class SpanModel(BaseModel):
    start_line: int = Field(ge=1)
    start_col: int = Field(ge=0)
    end_line: int = Field(ge=1)
    end_col: int = Field(ge=0)


class ParameterModel(BaseModel):
    name: str
    type: str | None = None
    has_default: bool = False
    accepts_default: bool = True
    span: SpanModel
    type_span: SpanModel | None = None
    text: str | None = None


class FunctionModel(BaseModel):
    name: str
    qualified_name: str | None = None
    annotations: list[str] = Field(default_factory=list)
    parameters: list[ParameterModel] = Field(default_factory=list)
    span: SpanModel
    interface_member: bool = False
    abstract: bool = False
    expect_or_actual: bool = False
    override: bool = False
    enclosing_scope: str | None = None


class FileModel(BaseModel):
    path: str
    functions: list[FunctionModel] = Field(default_factory=list)


class ManifestDocument(BaseModel):
    version: int = 1
    files: list[FileModel] = Field(default_factory=list)


# -----------------------------------------------------------------------
# JSON report (output)
# -----------------------------------------------------------------------


class FixOut(BaseModel):
    name: str
    original_text: str
    replacement_text: str
    auto_fix: bool
    start_line: int
    start_col: int
    end_line: int
    end_col: int


class DiagnosticOut(BaseModel):
    issue_id: str
    severity: Severity
    category: Category
    file_path: str
    line: int
    column: int
    end_line: int
    end_column: int
    message: str
    fix: FixOut | None = None


class ReportOut(BaseModel):
    files_scanned: int
    diagnostics: list[DiagnosticOut] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
