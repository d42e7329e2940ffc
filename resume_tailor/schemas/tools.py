from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class FetchUrlRequest(_CamelModel):
    url: str = Field(default="", max_length=3000)


class FetchUrlResponse(_CamelModel):
    content: str


class DocumentPairRequest(_CamelModel):
    resume: str = Field(default="", max_length=50000)
    job_posting: str = Field(default="", alias="jobPosting", max_length=50000)


class FixIssueRequest(DocumentPairRequest):
    issue_title: str = Field(default="", alias="issueTitle", max_length=500)
    issue_description: str | None = Field(default=None, alias="issueDescription", max_length=5000)


class AnalysisResponse(_CamelModel):
    success: Literal[True] = True
    analysis: dict[str, Any]
    resume_text: str = Field(alias="resumeText")
    job_posting_text: str = Field(alias="jobPostingText")


class FeatureRequest(_CamelModel):
    feature_name: str = Field(default="", alias="featureName", max_length=200)
    user_email: str | None = Field(default=None, alias="userEmail", max_length=320)


class FeatureRequestResponse(_CamelModel):
    success: Literal[True] = True
    message: str
    feature_name: str = Field(alias="featureName")
    user_email: str | None = Field(default=None, alias="userEmail")


class ResumeCountResponse(_CamelModel):
    count: int = Field(ge=0)


class HealthResponse(_CamelModel):
    status: Literal["ok"] = "ok"
    timestamp: datetime
