"""Pydantic models for the Tempo Cloud and Jira Cloud APIs."""

from pydantic import BaseModel, ConfigDict, Field


class JiraIssue(BaseModel):
    """Jira issue as returned by the issue endpoint; Jira sends the ID as a string."""

    id: int
    key: str


class UploadEntry(BaseModel):
    """Payload creating one Tempo Cloud worklog.

    start_date is YYYY-MM-DD and start_time is HH:MM:SS, both local time.
    """

    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    issue_id: int = Field(alias="issueId")
    start_date: str = Field(alias="startDate")
    start_time: str = Field(alias="startTime")
    billable_seconds: int = Field(alias="billableSeconds")
    time_spent_seconds: int = Field(alias="timeSpentSeconds")
    author_account_id: str = Field(alias="authorAccountId")
