"""Pydantic models for the Tempo Timesheets (server) API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Issue(BaseModel):
    """Jira issue a worklog was logged against."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    key: str
    account_key: str = Field(default="", alias="accountKey")
    project_id: int = Field(alias="projectId")
    project_key: str = Field(alias="projectKey")
    summary: str = ""


class FetchEntry(BaseModel):
    """Worklog returned by the search endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="tempoWorklogId")
    start_date: datetime = Field(alias="started")
    billable_seconds: int = Field(default=0, alias="billableSeconds")
    time_spent_seconds: int = Field(default=0, alias="timeSpentSeconds")
    comment: str = ""
    worker_key: str = Field(default="", alias="worker")
    issue: Issue


class SearchParams(BaseModel):
    """Body of the worklog search request; dates are YYYY-MM-DD."""

    model_config = ConfigDict(populate_by_name=True)

    from_date: str = Field(alias="from")
    to_date: str = Field(alias="to")
    worker: str


class UploadEntry(BaseModel):
    """Payload creating one worklog; started is YYYY-MM-DD."""

    model_config = ConfigDict(populate_by_name=True)

    comment: str = ""
    include_non_working_days: bool = Field(default=True, alias="includeNonWorkingDays")
    origin_task_id: str = Field(alias="originTaskId")
    started: str
    billable_seconds: int = Field(alias="billableSeconds")
    time_spent_seconds: int = Field(alias="timeSpentSeconds")
    worker: str
